import json

import pytest

from edf_viewer.main import main


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    monkeypatch.chdir(tmp_path)
    for name in ('EDF_MAX_POINTS_PER_WAVE', 'EDF_VISIBLE_SECONDS', 'EDF_DATA_DIR', 'LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def edf_file(edf_builder, tmp_path):
    path = tmp_path / 'rec.edf'
    path.write_bytes(edf_builder([list(range(100)), list(range(100, 200))], labels=['Fp1', 'Fp2']))
    return path


def test_info_text(edf_file, capsys):
    assert main(['info', str(edf_file)]) == 0
    out = capsys.readouterr().out
    assert 'Channels  : 2' in out
    assert 'Fp1' in out and 'Fp2' in out


def test_info_json(edf_file, capsys):
    assert main(['info', str(edf_file), '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['channel_count'] == 2
    assert data['record_count'] == 100
    assert [ch['label'] for ch in data['channels']] == ['Fp1', 'Fp2']
    assert data['start_datetime'] == '2026-10-18T09:30:00'


def test_window_json(edf_file, capsys):
    assert main(['window', str(edf_file), '--channel', '1', '--start', '10',
                 '--budget', '5', '--span', '50', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['start_index'] == 10
    assert data['end_index'] == 60
    assert data['values'] == [110, 120, 130, 140, 150]


def test_window_plain_output(edf_file, capsys):
    assert main(['window', str(edf_file), '--budget', '3', '--start', '500']) == 0
    assert capsys.readouterr().out.split() == ['97', '98', '99']


def test_data_dir_resolves_relative_paths(edf_file, monkeypatch, capsys):
    monkeypatch.setenv('EDF_DATA_DIR', str(edf_file.parent))
    monkeypatch.chdir(edf_file.parent.parent)
    assert main(['info', edf_file.name, '--json']) == 0
    assert json.loads(capsys.readouterr().out)['channel_count'] == 2


def test_truncated_file_fails(edf_builder, tmp_path):
    path = tmp_path / 'short.edf'
    path.write_bytes(edf_builder([[1, 2, 3]])[:-1])
    assert main(['info', str(path)]) == 1


def test_missing_file_fails(tmp_path):
    assert main(['info', str(tmp_path / 'absent.edf')]) == 1


def test_bad_channel_index(edf_file):
    assert main(['window', str(edf_file), '--channel', '7']) == 2


def test_invalid_budget_fails(edf_file):
    assert main(['window', str(edf_file), '--budget', '0']) == 1


def test_budget_of_one_is_accepted(edf_file, capsys):
    assert main(['window', str(edf_file), '--budget', '1', '--span', '10', '--start', '20']) == 0
    assert capsys.readouterr().out.split() == ['20']


def test_file_required_without_synthetic():
    with pytest.raises(SystemExit) as excinfo:
        main(['info'])
    assert excinfo.value.code == 2


def test_unreadable_config_fails(edf_file, tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('{')
    assert main(['--config', str(bad), 'info', str(edf_file)]) == 1


def test_synthetic_info(capsys):
    assert main(['info', '--synthetic', '--channels', '3', '--rate', '16', '--seconds', '2',
                 '--seed', '1', '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['source'] == '<synthetic>'
    assert [ch['sample_count'] for ch in data['channels']] == [32, 32, 32]


def test_preview_writes_png(tmp_path, capsys):
    out = tmp_path / 'preview.png'
    assert main(['preview', '--synthetic', '--channels', '2', '--rate', '64', '--seconds', '4',
                 '--seed', '0', '--budget', '50', '--span', '200', '-o', str(out)]) == 0
    assert out.read_bytes()[:8] == b'\x89PNG\r\n\x1a\n'


@pytest.mark.parametrize('content', ['null', '5', '[]', '{"viewer_settings": 5}', '{"app_settings": "x"}'])
def test_config_with_wrong_shape_fails(edf_file, tmp_path, content):
    cfg = tmp_path / 'shape.json'
    cfg.write_text(content)
    assert main(['--config', str(cfg), 'info', str(edf_file)]) == 1


def test_config_with_non_string_data_dir_fails(edf_file, tmp_path):
    cfg = tmp_path / 'dir.json'
    cfg.write_text('{"app_settings": {"data_dir": 5}}')
    assert main(['--config', str(cfg), 'info', 'rec.edf']) == 1
