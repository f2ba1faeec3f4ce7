#!/usr/bin/env python3
"""Tests for the kill line grammar."""

import pytest

from quake_report.parser.kill import Kill, MeansOfDeath, WORLD_KILLER, parse_kill


def test_world_kill_line():
    line = " 21:42 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT\n"
    pos, kill = parse_kill(line)
    assert kill == Kill(killer="<world>", victim="Isgalamido", weapon="MOD_TRIGGER_HURT")
    assert line[pos:] == ""


def test_player_kill_line_leaves_next_line():
    text = " 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH\n 22:07 Item: 3 ammo_rockets\n"
    pos, kill = parse_kill(text)
    assert kill.killer == "Isgalamido"
    assert kill.victim == "Mocinha"
    assert kill.weapon == "MOD_ROCKET_SPLASH"
    assert text[pos:] == " 22:07 Item: 3 ammo_rockets\n"


def test_doubled_timestamp_kill_line():
    pos, kill = parse_kill("26  0:00 Kill: 2 3 6: Zeh killed Mal by MOD_ROCKET\n")
    assert kill == Kill("Zeh", "Mal", "MOD_ROCKET")


@pytest.mark.parametrize("line", [
    # Not a kill
    " 20:38 ClientConnect: 2\n",
    " 20:40 Item: 2 weapon_rocketlauncher\n",
    # Player names with spaces do not fit the grammar
    "  1:02 Kill: 3 2 10: Zeh killed Dono da Bola by MOD_RAILGUN\n",
    "  1:47 Kill: 2 3 7: Dono da Bola killed Zeh by MOD_ROCKET_SPLASH\n",
    # Missing newline
    " 21:42 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT",
    # Missing timestamp
    "Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT\n",
    # Missing ids separator on this line
    " 21:42 Kill: 1022 2 22 <world> killed Isgalamido by MOD_TRIGGER_HURT\n 21:43 say: a: b\n",
])
def test_non_kill_lines(line):
    assert parse_kill(line) is None


def test_fields_never_span_lines():
    text = " 21:42 Kill: 1022 2 22: Isgalamido\n killed Mocinha by MOD_ROCKET\n"
    assert parse_kill(text) is None


def test_parse_kill_from_offset():
    text = " 20:37 ClientBegin: 2\n 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_FALLING\n"
    start = text.index("\n") + 1
    pos, kill = parse_kill(text, start)
    assert kill.weapon == "MOD_FALLING"
    assert pos == len(text)
    assert parse_kill(text, 0) is None


def test_killer_is_world():
    assert Kill(WORLD_KILLER, "Isgalamido", "MOD_FALLING").killer_is_world()
    assert not Kill("Isgalamido", "Mocinha", "MOD_RAILGUN").killer_is_world()
    assert not Kill("world", "Mocinha", "MOD_RAILGUN").killer_is_world()


def test_killer_is_victim():
    assert Kill("Isgalamido", "Isgalamido", "MOD_ROCKET_SPLASH").killer_is_victim()
    assert not Kill("Isgalamido", "Mocinha", "MOD_ROCKET_SPLASH").killer_is_victim()
    # A world kill is only a self kill if the victim is literally "<world>"
    assert not Kill(WORLD_KILLER, "Isgalamido", "MOD_LAVA").killer_is_victim()


def test_kill_is_immutable():
    kill = Kill("Isgalamido", "Mocinha", "MOD_RAILGUN")
    with pytest.raises(AttributeError):
        kill.killer = "Zeh"


def test_means_of_death_lookup():
    assert MeansOfDeath.is_known("MOD_TRIGGER_HURT")
    assert MeansOfDeath.is_known("MOD_GRAPPLE")
    assert not MeansOfDeath.is_known("MOD_SPOON")
    assert MeansOfDeath.MOD_TRIGGER_HURT.value == 22
