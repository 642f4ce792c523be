import random
import re

import pytest

from unoserver.game import (
    Game,
    Player,
    assign_name,
    card_to_string,
    draw_card,
    generate_starting_cards,
)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return min(self.value, stop - 1)


def test_assign_name_format():
    rng = random.Random(7)
    for _ in range(50):
        name = assign_name(rng)
        assert len(name) == 15
        assert re.fullmatch(r".+ #\d+", name)


def test_assign_name_first_choice():
    assert assign_name(FixedRng(0)).startswith("wiktorek #")


@pytest.mark.parametrize("value", [0, 39, 40, 79])
def test_draw_card_range(value):
    card = draw_card(FixedRng(value))
    assert 1 <= card <= 40


def test_draw_card_folds_upper_half():
    assert draw_card(FixedRng(79)) == draw_card(FixedRng(39))


def test_generate_starting_cards_fills_to_seven():
    cards = [5, 9]
    result = generate_starting_cards(cards, random.Random(1))
    assert result is cards
    assert len(cards) == 7
    assert cards[:2] == [5, 9]
    assert all(1 <= c <= 40 for c in cards)


@pytest.mark.parametrize(
    "card,name",
    [(1, "r0"), (5, "r1"), (2, "g0"), (22, "g5"), (39, "b9"), (40, "y9"), (13, "r3")],
)
def test_card_to_string(card, name):
    assert card_to_string(card) == name


@pytest.mark.parametrize("card", [0, 41, -3])
def test_card_to_string_unknown(card):
    assert card_to_string(card) == "whatthehell"


def test_card_names_are_unique():
    names = {card_to_string(c) for c in range(1, 41)}
    assert len(names) == 40


def make_game(table):
    game = Game(rng=random.Random(3))
    game.table_card = table
    return game


def test_check_move_same_colour():
    player = Player(id=0, username="a", cards=[2, 5])
    assert make_game(1).check_move(5, player) == 1


def test_check_move_same_number():
    player = Player(id=0, username="a", cards=[2, 5])
    assert make_game(1).check_move(2, player) == 0


def test_check_move_rejects_unmatched_card():
    player = Player(id=0, username="a", cards=[6])
    assert make_game(1).check_move(6, player) is None


def test_check_move_rejects_card_not_in_hand():
    player = Player(id=0, username="a", cards=[6])
    assert make_game(1).check_move(5, player) is None


def test_check_move_rejects_special_table_card():
    player = Player(id=0, username="a", cards=[5])
    assert make_game(41).check_move(5, player) is None


def test_play_move_swaps_last_card_in():
    game = make_game(1)
    player = Player(id=0, username="a", cards=[5, 9, 13])
    message, won = game.play_move(0, player)
    assert message == b"w" + bytes([5])
    assert won is False
    assert game.table_card == 5
    assert player.cards == [13, 9]


def test_play_move_last_position():
    game = make_game(1)
    player = Player(id=0, username="a", cards=[9, 5])
    message, won = game.play_move(1, player)
    assert message == b"w" + bytes([5])
    assert player.cards == [9]
    assert won is False


def test_play_move_winning_ends_game():
    game = make_game(1)
    game.is_active = True
    game.is_playable = True
    game.ready_count = 2
    game.players_assigned = 2
    game.turn_order = [0, 1]
    game.turn_index = 0
    player = Player(id=0, username="a", cards=[5])
    message, won = game.play_move(0, player)
    assert message == b"W" + bytes([5])
    assert won is True
    assert player.cards == []
    assert game.is_active is False
    assert game.is_playable is False
    assert game.ready_count == 0
    assert game.turn_order == []
    assert game.current_player_id is None


def test_start_sets_table_card():
    game = Game(rng=random.Random(11))
    game.players_assigned = 4
    message = game.start()
    assert game.is_active is True
    assert game.players_assigned == 0
    assert 1 <= game.table_card <= 40
    assert message == b"s" + bytes([game.table_card])


def test_next_player_forward_wraps():
    game = Game(rng=random.Random(0), turn_order=[10, 20, 30], turn_index=0)
    visited = []
    for _ in range(4):
        game.next_player()
        visited.append(game.current_player_id)
    assert visited == [20, 30, 10, 20]


def test_next_player_flipped_goes_back():
    game = Game(rng=random.Random(0), turn_order=[10, 20, 30], turn_index=0)
    game.is_flipped = True
    game.next_player()
    assert game.current_player_id == 30
    game.next_player()
    assert game.current_player_id == 20


def test_next_player_without_order_raises():
    with pytest.raises(RuntimeError):
        Game(rng=random.Random(0)).next_player()


def test_destroy_resets_state():
    game = Game(rng=random.Random(0), turn_order=[1, 2], turn_index=1)
    game.is_active = True
    game.is_playable = True
    game.ready_count = 2
    game.players_assigned = 2
    game.destroy()
    assert (game.is_active, game.is_playable) == (False, False)
    assert (game.ready_count, game.players_assigned) == (0, 0)
    assert game.turn_index is None
    assert game.turn_order == []