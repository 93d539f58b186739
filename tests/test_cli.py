import json

from scheduler.cli import EXIT_BAD_FILE, EXIT_INVALID_INPUT, EXIT_OK, main


def test_scenario_prints_sequence(capsys):
    assert main(['--scenario', 'four_jobs']) == EXIT_OK

    out = capsys.readouterr().out
    assert 'Sequence: x, y, w' in out
    assert 'Total profit: 140' in out


def test_json_output(capsys):
    assert main(['--scenario', 'five_jobs', '--json']) == EXIT_OK

    data = json.loads(capsys.readouterr().out)
    assert data['sequence'] == ['a', 'c', 'e']
    assert data['kpis']['total_profit'] == 142


def test_compare_reports_optimum(capsys):
    assert main(['--random', '8', '--seed', '5', '--max-deadline', '3', '--compare']) == EXIT_OK

    out = capsys.readouterr().out
    assert 'Baseline (slot-filling)' in out
    assert 'greedy is optimal' in out


def test_invalid_deadline_exits_with_error(tmp_path, capsys):
    path = tmp_path / 'jobs.csv'
    path.write_text('job_id,deadline,profit\na,0,10\n')

    assert main(['--jobs', str(path)]) == EXIT_INVALID_INPUT

    err = capsys.readouterr().err
    assert 'Invalid job input' in err
    assert 'Job a has deadline 0' in err


def test_reject_duplicates_flag(tmp_path, capsys):
    path = tmp_path / 'jobs.csv'
    path.write_text('job_id,deadline,profit\na,1,10\na,2,5\n')

    assert main(['--jobs', str(path)]) == EXIT_OK
    assert main(['--jobs', str(path), '--reject-duplicates']) == EXIT_INVALID_INPUT
    assert 'Job ID a is used by 2 jobs' in capsys.readouterr().err


def test_missing_job_file(tmp_path, capsys):
    assert main(['--jobs', str(tmp_path / 'missing.csv')]) == EXIT_BAD_FILE
    assert 'Job file not found' in capsys.readouterr().err


def test_missing_config_file(tmp_path, capsys):
    assert main(['--scenario', 'textbook', '--config', str(tmp_path / 'nope.yaml')]) == EXIT_BAD_FILE
    assert 'Config file not found' in capsys.readouterr().err


def test_export_writes_csv(tmp_path, capsys):
    out_path = tmp_path / 'sequence.csv'

    assert main(['--scenario', 'textbook', '--export', str(out_path)]) == EXIT_OK
    assert out_path.read_text().splitlines()[1:] == ['1,c,1,40,True', '2,a,4,20,True']


def test_empty_config_section_with_env_log_level(tmp_path, monkeypatch, capsys):
    path = tmp_path / 'policy.yaml'
    path.write_text('logging:\n')
    monkeypatch.setenv('JOB_SEQUENCER_LOG_LEVEL', 'debug')

    assert main(['--scenario', 'textbook', '--config', str(path)]) == EXIT_OK
    assert 'Sequence: c, a' in capsys.readouterr().out


def test_unwritable_export_path(tmp_path, capsys):
    out_path = tmp_path / 'missing_dir' / 'sequence.csv'

    assert main(['--scenario', 'textbook', '--export', str(out_path)]) == EXIT_BAD_FILE
    assert 'error:' in capsys.readouterr().err
