#!/usr/bin/env python3
"""Tests for the generate_training_plan.py CLI.

Run with: pytest plans/scripts/tests/test_generate_training_plan.py -v
"""

import json
import sys
from pathlib import Path

import pytest
import yaml

# Add script path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from generate_training_plan import main

EXAMPLES_DIR = Path(__file__).resolve().parent.parent.parent / 'examples'


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / 'request.yaml'
    path.write_text(
        "race_date: 2024-06-01\n"
        "goal_finish_time: '3:30:00'\n"
        "workout_days_of_week: [1, 3, 6]\n"
    )
    return path


class TestCli:

    def test_writes_json_file(self, request_file, tmp_path):
        output = tmp_path / 'out' / 'plan.json'
        assert main([str(request_file), '--output', str(output), '--format', 'json']) == 0

        data = json.loads(output.read_text())
        assert data['plan']['total_weeks'] == 14
        assert len(data['workouts']) == 42

    def test_writes_yaml_to_stdout(self, request_file, capsys):
        assert main([str(request_file)]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert data['workouts'][-1]['type'] == 'RaceDay'

    def test_single_week(self, request_file, capsys):
        assert main([str(request_file), '--week', '2', '--format', 'json']) == 0
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 3
        assert {r['week'] for r in rows} == {2}

    def test_week_out_of_range(self, request_file):
        assert main([str(request_file), '--week', '20']) == 1

    def test_calendar(self, request_file, capsys):
        assert main([str(request_file), '--calendar']) == 0
        out = capsys.readouterr().out
        assert out.startswith('Week  | Phase')
        assert 'RACE WEEK' in out

    def test_invalid_request(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("race_date: 2024-06-01\ngoal_finish_time: 'fast'\nworkout_days_of_week: [1]\n")
        assert main([str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / 'missing.yaml')]) == 1

    @pytest.mark.parametrize('name', ['spring_marathon.yaml', 'short_build.json'])
    def test_bundled_examples(self, name, capsys):
        assert main([str(EXAMPLES_DIR / name), '--format', 'json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['workouts'][-1]['is_race_day'] is True


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
