import pytest

from xiangqi_tui.settings import (
    EngineProtocol,
    SettingsStore,
    normalize_book_pick_mode,
    parse_bool,
    parse_key,
    set_line,
)


@pytest.fixture
def store(tmp_path):
    return SettingsStore(tmp_path / "xiangqi_tui.conf", environ={})


def test_parse_and_set_roundtrip():
    lines = ["book_path=abc"]
    set_line(lines, "engine_path", r"C:\eng.exe")
    text = "\n".join(lines)
    assert parse_key(text, "engine_path") == r"C:\eng.exe"
    assert parse_key(text, "book_path") == "abc"


def test_set_line_replaces_existing_entry():
    lines = ["a=1", "  b=2", "c=3"]
    set_line(lines, "b", "9")
    assert lines == ["a=1", "b=9", "c=3"]


def test_parse_key_missing_returns_none():
    assert parse_key("a=1\nb=2", "c") is None


def test_pick_mode_normalizes():
    assert normalize_book_pick_mode("optimal") == "optimal"
    assert normalize_book_pick_mode("positive_random") == "positive_random"
    assert normalize_book_pick_mode("other") == "optimal"


@pytest.mark.parametrize("raw", ["1", "true", " YES ", "On"])
def test_parse_bool_truthy(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", ["0", "false", "no", "", "maybe"])
def test_parse_bool_falsy(raw):
    assert parse_bool(raw) is False


def test_defaults_without_file(store):
    assert store.load_engine_path() == ""
    assert store.load_engine_protocol() is EngineProtocol.UCI
    assert store.load_engine_threads() == 4
    assert store.load_engine_hash_mb() == 512
    assert store.load_engine_skill() == 20
    assert store.load_engine_multi_pv() == 1
    assert store.load_engine_movetime_ms() == 3000
    assert store.load_engine_search_depth() == 12
    assert store.load_engine_search_nodes() == 500_000
    assert store.load_book_local_path() == ""
    assert store.load_book_local_enabled() is True
    assert store.load_book_cloud_enabled() is False
    assert store.load_book_pick_mode() == "optimal"
    assert store.load_book_max_halfmoves() == 999


def test_engine_values_roundtrip(store):
    store.save_engine_path("  /opt/engine  ")
    store.save_engine_protocol(EngineProtocol.UCCI)
    store.save_engine_threads(8)
    store.save_engine_hash_mb(1024)
    store.save_engine_skill(10)
    store.save_engine_multi_pv(3)
    store.save_engine_movetime_ms(5000)
    store.save_engine_search_depth(20)
    store.save_engine_search_nodes(2_000_000)
    assert store.load_engine_path() == "/opt/engine"
    assert store.load_engine_protocol() is EngineProtocol.UCCI
    assert store.load_engine_threads() == 8
    assert store.load_engine_hash_mb() == 1024
    assert store.load_engine_skill() == 10
    assert store.load_engine_multi_pv() == 3
    assert store.load_engine_movetime_ms() == 5000
    assert store.load_engine_search_depth() == 20
    assert store.load_engine_search_nodes() == 2_000_000


def test_book_values_roundtrip(store):
    store.save_book_local_path(" book.obk ")
    store.save_book_flags(False, True)
    store.save_book_pick_mode("positive_random")
    store.save_book_max_halfmoves(40)
    assert store.load_book_local_path() == "book.obk"
    assert store.load_book_local_enabled() is False
    assert store.load_book_cloud_enabled() is True
    assert store.load_book_pick_mode() == "positive_random"
    assert store.load_book_max_halfmoves() == 40


def test_save_pick_mode_normalizes_unknown(store):
    store.save_book_pick_mode("weird")
    assert store.read("book_pick_mode") == "optimal"


def test_loads_are_clamped(store):
    store.write("engine_threads", "200")
    store.write("engine_hash_mb", "1")
    store.write("engine_skill", "99")
    store.write("engine_multi_pv", "0")
    store.write("engine_movetime_ms", "5")
    store.write("engine_search_depth", "0")
    store.write("engine_search_nodes", "10")
    assert store.load_engine_threads() == 64
    assert store.load_engine_hash_mb() == 64
    assert store.load_engine_skill() == 20
    assert store.load_engine_multi_pv() == 1
    assert store.load_engine_movetime_ms() == 100
    assert store.load_engine_search_depth() == 1
    assert store.load_engine_search_nodes() == 1_000


def test_unparsable_numbers_fall_back_to_default(store):
    store.write("engine_threads", "300")
    store.write("engine_hash_mb", "-5")
    store.write("book_max_halfmoves", "abc")
    assert store.load_engine_threads() == 4
    assert store.load_engine_hash_mb() == 512
    assert store.load_book_max_halfmoves() == 999


def test_environment_overrides_engine_path(tmp_path):
    store = SettingsStore(tmp_path / "c.conf", environ={"XIANGQI_ENGINE_PATH": "  /env/eng "})
    store.save_engine_path("/file/eng")
    assert store.load_engine_path() == "/env/eng"


def test_blank_environment_is_ignored(tmp_path):
    store = SettingsStore(tmp_path / "c.conf", environ={"XIANGQI_ENGINE_PATH": "   "})
    store.save_engine_path("/file/eng")
    assert store.load_engine_path() == "/file/eng"


def test_protocol_is_case_insensitive(store):
    store.write("engine_protocol", "UCCI")
    assert store.load_engine_protocol() is EngineProtocol.UCCI


def test_write_keeps_other_lines_and_drops_blank_ones(store):
    store.path.write_text("a=1\n\n   \nengine_threads=2\n", encoding="utf-8")
    store.save_engine_threads(6)
    assert store.path.read_text(encoding="utf-8") == "a=1\nengine_threads=6\n"


def test_save_out_of_range_raises(store):
    with pytest.raises(ValueError):
        store.save_engine_threads(256)
    with pytest.raises(ValueError):
        store.save_book_max_halfmoves(-1)