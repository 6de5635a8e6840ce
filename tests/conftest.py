import json

import pytest


SCENARIOS = {
    "scenarios": [
        {
            "id": 1,
            "scenario_id": "FUEL-01",
            "title": "Fuel run from Medical Bay",
            "nodes": [
                {
                    "id": 1,
                    "message": "SHEPHARD, REDCROSS 1, at Medical Bay, request clearance to proceed to Fuel Area.",
                    "source_callsign": "REDCROSS 1",
                    "destination_callsign": "SHEPHARD",
                    "next_pos": 2,
                    "next_neg": None,
                },
                {
                    "id": 2,
                    "message": "REDCROSS 1, SHEPHARD, cleared to proceed, report at Fuel Area.",
                    "source_callsign": "SHEPHARD",
                    "destination_callsign": "REDCROSS 1",
                    "next_pos": 3,
                    "next_neg": None,
                },
                {
                    "id": 3,
                    "message": "SHEPHARD, REDCROSS 1, request radio check.",
                    "source_callsign": "REDCROSS 1",
                    "destination_callsign": "",
                    "next_pos": None,
                    "next_neg": None,
                },
            ],
        }
    ]
}


@pytest.fixture
def scenarios_path(tmp_path):
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps(SCENARIOS))
    return path


@pytest.fixture
def request_payload():
    return {
        'transcript': "SHEPHARD, REDCROSS 1, at Medical Bay, request clearance to proceed to Fuel Area.",
        'expected': "SHEPHARD, REDCROSS 1, at Medical Bay, request clearance to proceed to Fuel Area.",
        'difficulty': 'hard',
        'context': {'expectedReceiver': 'SHEPHARD', 'expectedSender': 'REDCROSS 1', 'requiresLocation': True},
    }
