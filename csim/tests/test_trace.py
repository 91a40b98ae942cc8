import io

import pytest

from csim.core.errors import MalformedRecord, SourceUnavailable
from csim.core.trace import TraceRecord, parse_lines, parse_record, read_trace


@pytest.mark.parametrize('text,expected', [
    ('L 10,4', TraceRecord('L', 0x10, 4, 0)),
    (' S 7ff000388,8\n', TraceRecord('S', 0x7ff000388, 8, 0)),
    ('L 0x0,1', TraceRecord('L', 0, 1, 0)),
    ('\tS ffffffffffffffff,1', TraceRecord('S', 2 ** 64 - 1, 1, 0)),
    ('L 1f, 2', TraceRecord('L', 0x1f, 2, 0)),
])
def test_parse_valid_records(text, expected):
    assert parse_record(text) == expected


@pytest.mark.parametrize('text,reason', [
    ('M 10,4', 'unknown operation'),
    ('I 400,4', 'unknown operation'),
    ('l 10,4', 'unknown operation'),
    ('L 10 4', "missing ','"),
    ('L 10', "missing ','"),
    ('L zz,4', 'not hexadecimal'),
    ('L -1,4', 'not hexadecimal'),
    ('L 1_0,4', 'not hexadecimal'),
    ('L ,4', 'not hexadecimal'),
    ('L 10,x', 'not a decimal'),
    ('L 10,', 'not a decimal'),
    ('L 10,-4', 'not a decimal'),
    ('L 10000000000000000,1', 'does not fit'),
    ('L', 'expected'),
])
def test_parse_malformed_records(text, reason):
    with pytest.raises(MalformedRecord, match=reason):
        parse_record(text, lineno=3)


def test_malformed_record_reports_line():
    with pytest.raises(MalformedRecord) as excinfo:
        list(parse_lines(['L 0,1', '', 'X 1,1']))
    assert excinfo.value.lineno == 3
    assert 'line 3' in str(excinfo.value)


def test_parse_lines_skips_blank_lines_and_numbers_from_one():
    records = list(parse_lines(['L 0,1\n', '   \n', 'S 4,2\n']))
    assert [(r.op, r.address, r.lineno) for r in records] == [('L', 0, 1), ('S', 4, 3)]


def test_read_trace_file(trace_file):
    path = trace_file(' L 10,1', ' S 18,1', ' L 20,1')
    records = list(read_trace(path))
    assert [r.address for r in records] == [0x10, 0x18, 0x20]
    assert [r.op for r in records] == ['L', 'S', 'L']


def test_read_trace_is_lazy(trace_file):
    path = trace_file('L 0,1', 'L 1,1', 'bogus')
    it = read_trace(path)
    assert next(it).address == 0
    assert next(it).address == 1
    with pytest.raises(MalformedRecord):
        next(it)


def test_missing_trace_is_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable):
        list(read_trace(str(tmp_path / 'nope.trace')))


def test_missing_trace_fails_before_iteration(tmp_path):
    # the file is opened by the call itself, not by the first next()
    with pytest.raises(SourceUnavailable, match='cannot open trace file'):
        read_trace(str(tmp_path / 'nope.trace'))


def test_directory_is_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable):
        list(read_trace(str(tmp_path)))


def test_undecodable_trace_is_source_unavailable(tmp_path):
    path = tmp_path / 'binary.trace'
    path.write_bytes(b'L 0,1\n\xff\xfe\x00\n')
    with pytest.raises(SourceUnavailable):
        list(read_trace(str(path)))


def test_read_trace_from_stdin(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('L 0,1\nS 8,4\n'))
    assert [r.op for r in read_trace('-')] == ['L', 'S']
