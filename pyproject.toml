[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sockcraft"
version = "0.1.0"
description = "Small socket servers and clients: UDP chat relay, TCP command server, length-framed JSON calculator and static HTTP server"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket", "tcp", "udp", "http", "thread pool", "avl tree", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sockcraft-udpserver = "sockcraft.udpserver:main"
sockcraft-udpclient = "sockcraft.udpclient:main"
sockcraft-tcpserver = "sockcraft.tcpserver:main"
sockcraft-tcpclient = "sockcraft.tcpclient:main"
sockcraft-calcserver = "sockcraft.calcserver:main"
sockcraft-calcclient = "sockcraft.calcclient:main"
sockcraft-httpd = "sockcraft.httpd:main"

[tool.hatch.build.targets.wheel]
packages = ["sockcraft"]

[tool.pytest.ini_options]
addopts = "-ra"
