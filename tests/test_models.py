import pytest

from wildbattle.battle.factory import instantiate, species
from wildbattle.battle.models import Combatant, ItemDefinition, MoveDefinition, SpeciesTemplate
from wildbattle.core.errors import InvalidTemplate, ValidationError

TACKLE = MoveDefinition("Tackle", 12, "Normal")


def test_instantiate_starts_at_full_hp():
    template = SpeciesTemplate("Bulbasaur", 90, (TACKLE,), frozenset({"Grass"}))
    c = instantiate(template)
    assert c.name == "Bulbasaur"
    assert c.current_hp == c.max_hp == 90
    assert c.moves == (TACKLE,)
    assert "Grass" in c.types
    assert not c.is_defeated


def test_instantiate_name_override():
    c = instantiate(species("bulbasaur"), "Wild Bulbasaur")
    assert c.name == "Wild Bulbasaur"


@pytest.mark.parametrize("max_hp", [0, -5])
def test_instantiate_rejects_bad_hp(max_hp):
    with pytest.raises(InvalidTemplate):
        instantiate(SpeciesTemplate("Broken", max_hp, (TACKLE,)))


def test_instantiate_rejects_moveless_template():
    with pytest.raises(InvalidTemplate) as exc:
        instantiate(SpeciesTemplate("Mute", 40, ()))
    assert exc.value.template == "Mute"
    # InvalidTemplate is still a validation failure
    assert isinstance(exc.value, ValidationError)


def test_combatants_are_independent_copies():
    template = species("wild_bulbasaur")
    a = instantiate(template)
    b = instantiate(template)
    a.set_hp(3)
    assert b.current_hp == 70
    assert template.max_hp == 70
    assert a.moves is not None and a.moves == b.moves


def test_move_definition_validation():
    with pytest.raises(ValidationError):
        MoveDefinition("Splash", 0)
    with pytest.raises(ValidationError):
        MoveDefinition("", 10)


def test_move_definition_is_immutable():
    with pytest.raises(Exception):
        TACKLE.base_power = 99  # type: ignore[misc]


def test_combatant_clamps_hp():
    c = Combatant("Pika", 60, 500, (TACKLE,))
    assert c.current_hp == 60
    old = c.set_hp(-10)
    assert old == 60
    assert c.current_hp == 0
    assert c.is_defeated


@pytest.mark.parametrize("max_hp", [0, -1])
def test_combatant_rejects_non_positive_max_hp(max_hp):
    with pytest.raises(ValidationError):
        Combatant("Ghost", max_hp, 0, (TACKLE,))


def test_combatant_rejects_empty_moves():
    with pytest.raises(ValidationError):
        Combatant("Empty", 50, 50, ())


def test_hp_fraction():
    c = Combatant("Pika", 60, 15, (TACKLE,))
    assert c.hp_fraction == pytest.approx(0.25)


def test_find_move_is_case_insensitive():
    c = instantiate(species("pikachu"))
    assert c.find_move("thunder shock").name == "Thunder Shock"
    assert c.find_move("Surf") is None


def test_item_consume_never_goes_negative():
    potion = ItemDefinition("Potion", 20, 1)
    assert potion.consume()
    assert potion.remaining_count == 0
    assert not potion.in_stock
    assert not potion.consume()
    assert potion.remaining_count == 0


@pytest.mark.parametrize("heal,count", [(0, 1), (20, -1)])
def test_item_validation(heal, count):
    with pytest.raises(ValidationError):
        ItemDefinition("Potion", heal, count)
