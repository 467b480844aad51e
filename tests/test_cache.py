import pytest

from boba.cache import Location, SourceCache
from boba.errors import MixedTabsAndSpaces, UnknownVariable
from boba.interpreter import Interpreter, parse_program


def test_store_and_load():
    cache = SourceCache()
    entry = cache.store('main.boba', 'let x = 1')
    assert cache.load(entry.id) is entry
    assert cache[entry.id].label == 'main.boba'
    assert entry.slice(Location(entry.id, 4, 5)) == 'x'


def test_ids_do_not_resolve_in_other_caches():
    first = SourceCache()
    second = SourceCache()
    entry = first.store('a', 'x')
    second.store('b', 'y')
    assert second.load(entry.id) is None
    with pytest.raises(KeyError):
        second[entry.id]


def test_location_union():
    a = Location(None, 2, 4)
    b = Location(None, 7, 9)
    assert a.to(b) == Location(None, 2, 9)


def test_line_and_column():
    cache = SourceCache()
    entry = cache.store('t', 'ab\ncd\nef')
    assert entry.line_col(0) == (1, 1)
    assert entry.line_col(4) == (2, 2)
    assert entry.line_text(3) == 'ef'


def test_render_run_error():
    interp = Interpreter()
    with pytest.raises(UnknownVariable) as info:
        interp.run_source('let a = 1\nprint(b)', 'main.boba')
    assert interp.report(info.value).split('\n') == [
        'error[R-002]: Unknown Variable',
        ' --> main.boba:2:7',
        '  |',
        '2 | print(b)',
        "  |       ^ no variable named 'b' is in scope",
    ]


def test_render_parse_error():
    interp = Interpreter()
    source = 'fn f():\n\tx\nfn g():\n    y'
    with pytest.raises(MixedTabsAndSpaces) as info:
        interp.load(source, 'tabs.boba')
    report = interp.report(info.value)
    assert report.startswith('error[C-009]: Mixed Tabs and Spaces\n')
    assert ' --> tabs.boba:4:1' in report


def test_render_without_source():
    error = UnknownVariable('q', Location(None, 0, 1))
    assert SourceCache().render(error) == "error[R-002]: Unknown Variable\n  no variable named 'q' is in scope"


def test_parse_program_stores_text_in_given_cache():
    cache = SourceCache()
    source_id, statements = parse_program('let a = 1', 'a.boba', cache)
    assert cache[source_id].label == 'a.boba'
    assert statements[0].location.source == source_id
    assert len(cache.entries) == 1


def test_parse_program_without_cache_uses_a_private_one():
    first, _ = parse_program('1')
    second, _ = parse_program('2')
    assert first.cache != second.cache
