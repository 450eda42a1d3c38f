from sockcraft.dictionary import Dictionary
from sockcraft.inetaddr import InetAddr

CLIENT = InetAddr("127.0.0.1", 9000)


def make_dict(tmp_path, text):
    path = tmp_path / "dictionary.txt"
    path.write_text(text, encoding="utf-8")
    d = Dictionary(path)
    assert d.load() is True
    return d


def test_lookup_of_loaded_word(tmp_path):
    d = make_dict(tmp_path, "apple:苹果\nbanana:香蕉\n")
    assert d.translate("apple", CLIENT) == "苹果"
    assert d.translate("banana", CLIENT) == "香蕉"


def test_missing_word_is_unknown(tmp_path):
    d = make_dict(tmp_path, "apple:苹果\n")
    assert d.translate("cherry", CLIENT) == "unknown"


def test_bad_and_blank_lines_skipped(tmp_path):
    d = make_dict(tmp_path, "no separator\n\nkey:value\n")
    assert d.entries == {"key": "value"}


def test_split_at_first_separator(tmp_path):
    d = make_dict(tmp_path, "time:12:30\n")
    assert d.translate("time", CLIENT) == "12:30"


def test_first_entry_wins_for_duplicate_keys(tmp_path):
    d = make_dict(tmp_path, "a:first\na:second\n")
    assert d.translate("a", CLIENT) == "first"


def test_missing_file_fails_to_load(tmp_path):
    d = Dictionary(tmp_path / "absent.txt")
    assert d.load() is False
    assert d.entries == {}