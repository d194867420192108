"""Tests for the hand-written path method bodies."""

from noderef_refcode import PATH_BODIES, reference_body


def test_path_methods_have_bodies():
    """Test the four path operations are covered."""
    assert sorted(PATH_BODIES) == ["join", "normalize", "relative", "resolve"]
    for name in PATH_BODIES:
        assert reference_body("path", name) == PATH_BODIES[name]


def test_other_methods_have_none():
    """Test every other method keeps a generated body."""
    assert reference_body("path", "basename") is None
    assert reference_body("fs", "join") is None


def test_bodies_are_unindented_and_return():
    """Test bodies start at column zero and return a value."""
    for name, body in PATH_BODIES.items():
        assert not body.startswith(" "), name
        assert body.rstrip().endswith(";"), name
        assert "return " in body, name
