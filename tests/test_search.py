"""
Tests for the alpha-beta search.

Pruning and move ordering must never change the backed-up value, so
most checks compare against an unpruned minimax over the same tree.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from skirmish.actions import Action, is_all_attack, is_pure_move
from skirmish.adapters import load_scenario, state_from_snapshot
from skirmish.board import Board
from skirmish.errors import ConfigurationError
from skirmish.game_state import GameState
from skirmish.units import Faction, Unit, Obstacle
from minimax_ai.alphabeta import AlphaBetaSearch, order_children, minimax_value
from minimax_ai.config import SearchConfig

SCENARIO_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                            'scenarios')
INF = float('inf')


def scenario_state(name, to_move=Faction.GOOD):
    return state_from_snapshot(load_scenario(os.path.join(SCENARIO_DIR, name)), to_move)


def unit(uid, faction, x, y, hp=10, damage=2, attack_range=1):
    return Unit(unit_id=uid, faction=faction, x=x, y=y, hp=hp, max_hp=10,
                damage=damage, attack_range=attack_range)


def close_combat_state(to_move=Faction.GOOD):
    """Two versus two, already in contact, one obstacle in the middle."""
    board = Board(5, 5, units=[
        unit(0, Faction.GOOD, 1, 1, damage=3),
        unit(1, Faction.GOOD, 2, 3, damage=3),
        unit(2, Faction.BAD, 2, 1, hp=6),
        unit(3, Faction.BAD, 3, 3, hp=6, attack_range=2),
    ], obstacles=[Obstacle(100, 2, 2)])
    return GameState(board, to_move)


def search(state, depth, **kwargs):
    return AlphaBetaSearch(SearchConfig(depth=depth, **kwargs)).search(state)


class TestSearchConfig:
    def test_defaults(self):
        config = SearchConfig()
        assert config.depth == 3
        assert not config.has_budget
        assert config.weights.obstacle_penalty == 200000.0

    @pytest.mark.parametrize("kwargs", [
        {'depth': 0},
        {'depth': -2},
        {'max_nodes': 0},
        {'time_limit': -1.0},
        {'obstacle_penalty': -5.0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ConfigurationError):
            AlphaBetaSearch(SearchConfig(**kwargs))

    def test_invalid_depth_override(self):
        engine = AlphaBetaSearch(SearchConfig(depth=2))
        with pytest.raises(ConfigurationError):
            engine.search(scenario_state('duel.json'), depth=0)

    def test_to_dict(self):
        data = SearchConfig(depth=4, max_nodes=1000).to_dict()
        assert data['depth'] == 4
        assert data['max_nodes'] == 1000
        assert data['time_limit'] is None


class TestOrdering:
    def test_attack_groups_come_first(self):
        state = close_combat_state()
        ordered = order_children(state.successors())
        assert len(ordered) == len(state.successors())

        groups = []
        for child in ordered:
            if is_all_attack(child.action):
                groups.append(0)
            elif is_pure_move(child.action):
                groups.append(2)
            else:
                groups.append(1)
        assert groups == sorted(groups)
        assert groups[0] == 0
        assert 1 in groups

    def test_moves_sorted_by_descending_utility(self):
        ordered = order_children(scenario_state('two_vs_two.json').successors())
        utilities = [c.state.utility() for c in ordered if is_pure_move(c.action)]
        assert utilities == sorted(utilities, reverse=True)

    def test_moves_sorted_descending_for_bad_too(self):
        ordered = order_children(scenario_state('two_vs_two.json', Faction.BAD).successors())
        utilities = [c.state.utility() for c in ordered]
        assert utilities == sorted(utilities, reverse=True)

    def test_empty(self):
        assert order_children([]) == []


class TestAlphaBeta:
    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_duel_matches_minimax(self, depth):
        state = scenario_state('duel.json')
        assert search(state, depth).value == minimax_value(state, depth)

    @pytest.mark.parametrize("name", ['two_vs_two.json', 'obstacles.json'])
    def test_scenarios_match_minimax(self, name):
        state = scenario_state(name)
        assert search(state, 2).value == minimax_value(state, 2)

    @pytest.mark.parametrize("to_move", [Faction.GOOD, Faction.BAD])
    def test_close_combat_matches_minimax(self, to_move):
        state = close_combat_state(to_move)
        assert search(state, 2).value == minimax_value(state, 2)

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_root_action_achieves_value(self, depth):
        state = scenario_state('duel.json')
        result = search(state, depth)
        assert result.found_action
        assert minimax_value(state.apply(result.action), depth - 1) == result.value

    def test_root_action_achieves_value_with_two_units(self):
        state = close_combat_state()
        result = search(state, 2)
        assert set(result.action) == {0, 1}
        assert minimax_value(state.apply(result.action), 1) == result.value

    def test_good_takes_the_kill(self):
        state = GameState(Board(4, 4, units=[
            unit(0, Faction.GOOD, 1, 0, damage=10),
            unit(1, Faction.BAD, 2, 0, hp=5),
        ]))
        result = search(state, 1)
        assert result.value == INF
        assert result.action == {0: Action.attack(0, 1)}

    def test_bad_takes_the_kill(self):
        state = GameState(Board(4, 4, units=[
            unit(0, Faction.GOOD, 1, 0, hp=3),
            unit(1, Faction.BAD, 2, 0, damage=4),
        ]), Faction.BAD)
        result = search(state, 1)
        assert result.value == -INF
        assert result.action == {1: Action.attack(1, 0)}

    def test_won_root_has_no_action(self):
        state = GameState(Board(4, 4, units=[unit(0, Faction.GOOD, 0, 0)]))
        result = search(state, 3)
        assert result.value == INF
        assert result.action is None
        assert not result.found_action

    def test_lost_root_has_no_action(self):
        state = GameState(Board(4, 4, units=[unit(1, Faction.BAD, 0, 0)]), Faction.BAD)
        result = search(state, 2)
        assert result.value == -INF
        assert result.action is None

    def test_depth_is_respected(self):
        result = search(scenario_state('duel.json'), 2)
        assert result.stats.depth_reached == 2
        assert result.stats.leaves > 0

    def test_pruning_happens(self):
        state = scenario_state('two_vs_two.json')
        result = search(state, 2)
        full_tree = 1 + sum(1 + len(c.state.successors()) for c in state.successors())
        assert result.stats.cutoffs > 0
        assert result.stats.nodes < full_tree

    def test_search_does_not_mutate_root(self):
        state = scenario_state('obstacles.json')
        before = {uid: (u.x, u.y, u.hp) for uid, u in state.board.units.items()}
        search(state, 2)
        after = {uid: (u.x, u.y, u.hp) for uid, u in state.board.units.items()}
        assert before == after

    def test_repeatable(self):
        state = close_combat_state()
        first = search(state, 2)
        second = search(close_combat_state(), 2)
        assert first.value == second.value
        assert first.action == second.action


class TestBudgets:
    def test_generous_budget_matches_plain_search(self):
        state = scenario_state('duel.json')
        plain = search(state, 3)
        budgeted = search(state, 3, max_nodes=10 ** 6, time_limit=60.0)
        assert budgeted.value == plain.value
        assert budgeted.action == plain.action
        assert budgeted.stats.depth_reached == 3

    def test_node_budget_stops_deepening(self):
        state = scenario_state('two_vs_two.json')
        result = search(state, 3, max_nodes=200)
        assert result.found_action
        assert result.stats.depth_reached < 3

    def test_exhausted_budget_falls_back_to_first_child(self):
        state = scenario_state('two_vs_two.json')
        result = search(state, 3, max_nodes=1)
        first = order_children(state.successors())[0]
        assert result.stats.depth_reached == 0
        assert result.action == first.action
        assert result.value == first.state.utility()

    def test_exhausted_budget_on_won_root(self):
        state = GameState(Board(4, 4, units=[unit(0, Faction.GOOD, 0, 0)]))
        result = search(state, 3, max_nodes=1)
        assert result.action is None
        assert result.value == INF

    def test_time_budget(self):
        state = scenario_state('duel.json')
        result = search(state, 2, time_limit=30.0)
        assert result.stats.depth_reached == 2
        assert result.stats.elapsed < 30.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
