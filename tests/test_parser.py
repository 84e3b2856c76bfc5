import pytest

from core.process import ProcessState
from simio.parser import DEFAULT_TIME_QUANTUM, load_processes, parse_processes, parse_sysconfig


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_sysconfig_quantum(tmp_path):
    path = _write(tmp_path, 'sysconfig.txt', '# comment\n\ntimequantum 3\n')
    assert parse_sysconfig(path) == 3


def test_sysconfig_quantum_with_unit(tmp_path):
    assert parse_sysconfig(_write(tmp_path, 's.txt', 'timequantum 4instr\n')) == 4


def test_sysconfig_default(tmp_path):
    assert parse_sysconfig(_write(tmp_path, 's.txt', '# nothing\n')) == DEFAULT_TIME_QUANTUM


@pytest.mark.parametrize('text', ['timequantum 0\n', 'timequantum\n', 'timequantum abc\n'])
def test_sysconfig_rejects_bad_quantum(tmp_path, text):
    with pytest.raises(ValueError):
        parse_sysconfig(_write(tmp_path, 's.txt', text))


def test_processes_keep_file_order(tmp_path):
    path = _write(tmp_path, 'p.txt', 'process 9\n\tA\n\tES2 FIN\n# gap\n\nprocess 3\n    B\n')
    assert parse_processes(path) == {9: ['A', 'ES2', 'FIN'], 3: ['B']}
    assert list(parse_processes(path)) == [9, 3]


def test_load_processes_start_new(tmp_path):
    procs = load_processes(_write(tmp_path, 'p.txt', 'process 1\n\tINSTR1\n\tFIN\n'))
    assert len(procs) == 1
    assert procs[0].pid == 1
    assert procs[0].state is ProcessState.NEW
    assert procs[0].instructions == ('INSTR1', 'FIN')


def test_process_without_instructions(tmp_path):
    assert parse_processes(_write(tmp_path, 'p.txt', 'process 1\n')) == {1: []}


@pytest.mark.parametrize(
    'text,message',
    [
        ('process 1\n\tA\nprocess 1\n\tB\n', 'duplicate process 1'),
        ('\tA\n', 'before any process header'),
        ('proc one\n', "expected 'process <pid>'"),
    ],
)
def test_processes_rejects_malformed(tmp_path, text, message):
    with pytest.raises(ValueError, match=message):
        parse_processes(_write(tmp_path, 'p.txt', text))
