import pytest

from errors import ConfigurationError
from wheels import (
    ALPHABET,
    NOTCHES,
    REFLECTORS,
    ROTORS,
    SLOT_NOTCHES,
    SLOT_ROTORS,
    check_permutation,
    letter_index,
    to_letters,
)


@pytest.mark.parametrize("wiring", [*ROTORS.values(), *REFLECTORS.values()])
def test_every_wiring_is_a_bijection(wiring):
    assert check_permutation(wiring) == wiring
    assert len(set(wiring)) == 26


def test_reflector_b_is_an_involution_without_fixed_points():
    wiring = REFLECTORS["B"]
    for i, c in enumerate(wiring):
        j = ALPHABET.index(c)
        assert i != j
        assert wiring[j] == ALPHABET[i]


def test_historical_tables_are_verbatim():
    assert ROTORS["I"] == "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
    assert ROTORS["II"] == "AJDKSIRUXBLHWTMCQGZNPYFVOE"
    assert ROTORS["III"] == "BDFHJLCPRTXVZNYEIWGAKMUSQO"
    assert REFLECTORS["B"] == "YRUHQSLDPXNGOKMIEBFZCWVJAT"
    assert NOTCHES == {"I": "Q", "II": "E", "III": "V"}


def test_slots_run_right_to_left():
    assert SLOT_ROTORS == ("III", "II", "I")
    assert SLOT_NOTCHES == (16, 4, 21)


@pytest.mark.parametrize(
    "wiring",
    ["ABC", "A" * 26, "EKMFLGDQVZNTOWYHXUSPAIBRC1"],
)
def test_check_permutation_rejects_bad_wiring(wiring):
    with pytest.raises(ConfigurationError):
        check_permutation(wiring)


def test_letter_index():
    assert letter_index("A") == 0
    assert letter_index("Z") == 25
    for bad in ("a", "1", "", "AB"):
        with pytest.raises(ConfigurationError):
            letter_index(bad)


def test_to_letters_uppercases_ascii_only():
    assert to_letters("qEv") == "QEV"
    assert to_letters("") == ""


@pytest.mark.parametrize("text", ["AA\u0131", "A\u00df", "\u00e9", "A-"])
def test_to_letters_rejects_anything_outside_a_to_z(text):
    # "ı".upper() == "I" and "ß".upper() == "SS" must not sneak through
    with pytest.raises(ConfigurationError, match="Must be A-Z"):
        to_letters(text, "rotor position")
