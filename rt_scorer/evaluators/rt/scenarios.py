"""
Scenario Context - Scenario loading and expectation lookup

Handles:
- Loading scenario definitions from JSON
- Finding the nodes a given callsign has to speak
- Deriving the expected message and scoring context for a node
"""

import json
from typing import Dict, List, Optional, Tuple

from .models import ScoringContext
from .structure import detect_location
from .normalizer import normalize_text

DEFAULT_RECEIVER = 'SHEPHARD'


class ScenarioContext:
    """Manages scenario data and node lookups"""

    def __init__(self):
        self.scenarios: Dict[str, dict] = {}  # str(id) -> scenario data
        self.aliases: Dict[str, str] = {}  # scenario_id -> str(id)

    def load_scenarios(self, scenarios_path: str) -> int:
        """
        Load scenarios from JSON

        Accepts {"scenarios": [...]} or a bare list. Returns the number loaded.
        """

        with open(scenarios_path, 'r') as f:
            data = json.load(f)

        entries = data.get('scenarios', []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ValueError(f"No scenario list found in {scenarios_path}")

        for scenario in entries:
            key = str(scenario.get('id', scenario.get('scenario_id', '')))

            # Keep first definition
            if not key or key in self.scenarios:
                continue

            self.scenarios[key] = {
                'id': scenario.get('id'),
                'scenario_id': scenario.get('scenario_id', ''),
                'title': scenario.get('title', ''),
                'nodes': scenario.get('nodes', []),
            }
            if scenario.get('scenario_id'):
                self.aliases[str(scenario['scenario_id'])] = key

        return len(self.scenarios)

    def get_scenario(self, scenario_id) -> Optional[dict]:
        """Lookup by numeric id or scenario_id string"""
        key = str(scenario_id)
        if key in self.scenarios:
            return self.scenarios[key]
        if key in self.aliases:
            return self.scenarios[self.aliases[key]]
        return None

    def get_node(self, scenario_id, node_id) -> Optional[dict]:
        scenario = self.get_scenario(scenario_id)
        if scenario is None:
            return None
        for node in scenario['nodes']:
            if str(node.get('id')) == str(node_id):
                return node
        return None

    def player_nodes(self, scenario_id, callsign: str) -> List[dict]:
        """Nodes spoken by the given callsign, in scenario order"""
        scenario = self.get_scenario(scenario_id)
        if scenario is None:
            return []
        wanted = (callsign or '').upper()
        return [
            node for node in scenario['nodes']
            if (node.get('source_callsign') or '').upper() == wanted
        ]

    def get_expectation(self, scenario_id, node_id) -> Optional[Tuple[str, ScoringContext]]:
        """
        Expected message and scoring context for one node

        The receiver defaults to SHEPHARD when the node names no destination.
        Location is required only when the expected message gives one.
        """

        node = self.get_node(scenario_id, node_id)
        if node is None:
            return None

        message = node.get('message', '')
        context = ScoringContext(
            expected_receiver=node.get('destination_callsign') or DEFAULT_RECEIVER,
            expected_sender=node.get('source_callsign', ''),
            requires_location=detect_location(normalize_text(message)) is not None,
        )
        return message, context
