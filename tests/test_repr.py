import pytest

from quatview.repr import Color, ComputedRepresentation, ReprSettings


def test_default_computed_is_black_unit():
    computed = ComputedRepresentation()
    assert computed.color == Color.BLACK
    assert computed.length == 1.0
    assert computed.scale == 1.0


def test_resolve_without_overrides_or_parent_gives_defaults():
    assert ReprSettings().resolve() == ComputedRepresentation()


def test_resolve_inherits_from_parent():
    parent = ComputedRepresentation(Color(0.2, 0.4, 0.6), 2.5, 3.0)
    assert ReprSettings().resolve(parent) == parent


def test_resolve_prefers_overrides():
    parent = ComputedRepresentation(Color(0.2, 0.4, 0.6), 2.5, 3.0)
    settings = ReprSettings(length=0.7)
    result = settings.resolve(parent)
    assert result.length == 0.7
    assert result.color == parent.color
    assert result.scale == parent.scale


def test_enable_override_copies_background():
    background = ComputedRepresentation(Color(0.1, 0.2, 0.3), 4.0, 2.0)
    settings = ReprSettings()
    assert settings.set_override("length", True, background) is True
    assert settings.length == 4.0
    assert settings.set_override("length", True, background) is False


def test_disable_override_clears():
    settings = ReprSettings(scale=2.0)
    assert settings.set_override("scale", False, ComputedRepresentation()) is True
    assert settings.scale is None
    assert settings.set_override("scale", False, ComputedRepresentation()) is False


def test_edit_disabled_field_is_ignored():
    settings = ReprSettings()
    assert settings.edit("length", 3.0) is False
    assert settings.length is None


def test_edit_always_on_fills_and_edits():
    background = ComputedRepresentation(Color(0.1, 0.2, 0.3), 4.0, 2.0)
    settings = ReprSettings()
    assert settings.edit("scale", 2.0, True, background) is False
    assert settings.scale == 2.0
    assert settings.edit("scale", 5.0, True, background) is True
    assert settings.scale == 5.0


def test_edit_clamps_sizes():
    settings = ReprSettings(length=1.0, scale=1.0)
    settings.edit("length", -3.0)
    settings.edit("scale", 0.0)
    assert settings.length == 0.01
    assert settings.scale == 0.01


def test_edit_color_from_rgb_sets_opaque():
    settings = ReprSettings(color=Color.BLACK)
    assert settings.edit("color", (0.5, 0.25, 1.0)) is True
    assert settings.color == Color(0.5, 0.25, 1.0, 1.0)
    assert settings.color.to_rgb() == (0.5, 0.25, 1.0)


def test_edit_same_value_reports_no_change():
    settings = ReprSettings(length=2.0)
    assert settings.edit("length", 2.0) is False


def test_unknown_field_raises():
    with pytest.raises(ValueError):
        ReprSettings().edit("width", 1.0)
    with pytest.raises(ValueError):
        ReprSettings().set_override("width", True, ComputedRepresentation())


def test_bad_color_raises():
    settings = ReprSettings(color=Color.BLACK)
    with pytest.raises(ValueError):
        settings.edit("color", (0.1, 0.2))


def test_nan_length_raises():
    settings = ReprSettings(length=1.0)
    with pytest.raises(ValueError):
        settings.edit("length", float("nan"))