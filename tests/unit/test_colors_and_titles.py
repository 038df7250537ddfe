"""Unit tests for actor colors and movie titles."""

import pytest

from chatcinema.exceptions import ConfigurationError
from chatcinema.parser import (
    PALETTE,
    HashedColorPolicy,
    RandomColorPolicy,
    get_color_policy,
)
from chatcinema.utils import movie_title


class TestColorPolicies:
    """Test cases for the color policies."""

    def test_palette(self):
        """Test the five chat colors."""
        assert PALETTE == ("gray", "green", "purple", "red", "yellow")

    def test_random_policy_picks_from_palette(self):
        """Test random colors stay within the palette."""
        policy = RandomColorPolicy()

        colors = {policy(f"Actor{n}", 0) for n in range(200)}

        assert colors <= set(PALETTE)
        assert len(colors) > 1

    def test_random_policy_seed_is_reproducible(self):
        """Test equal seeds give equal color sequences."""
        first = RandomColorPolicy(seed=42)
        second = RandomColorPolicy(seed=42)

        assert [first("A", n) for n in range(20)] == [second("A", n) for n in range(20)]

    def test_hashed_policy_is_deterministic(self):
        """Test the hashed policy depends only on actor and scene."""
        policy = HashedColorPolicy()

        assert policy("Doc", 3) == HashedColorPolicy()("Doc", 3)
        assert policy("Doc", 3) in PALETTE

    def test_custom_palette(self):
        """Test policies honor a custom palette."""
        assert HashedColorPolicy(palette=["red"])("Doc", 0) == "red"
        assert RandomColorPolicy(palette=["yellow"])("Doc", 0) == "yellow"

    @pytest.mark.parametrize("policy_class", [RandomColorPolicy, HashedColorPolicy])
    def test_empty_palette(self, policy_class):
        """Test an empty palette is a configuration error."""
        with pytest.raises(ConfigurationError):
            policy_class(palette=[])

    def test_get_color_policy(self):
        """Test policies are looked up by name."""
        assert isinstance(get_color_policy("random"), RandomColorPolicy)
        assert isinstance(get_color_policy(" Hashed "), HashedColorPolicy)

    def test_get_color_policy_unknown(self):
        """Test an unknown policy name is rejected."""
        with pytest.raises(ConfigurationError, match="Unknown color policy"):
            get_color_policy("rainbow")


class TestMovieTitle:
    """Test cases for movie_title."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("back_to_the_future", "Back to the Future"),
            ("hackers", "Hackers"),
            ("the_matrix", "The Matrix"),
            ("the_holy_grail", "The Holy Grail"),
            ("gone_with_the_wind", "Gone With the Wind"),
            ("a_fish_called_wanda", "A Fish Called Wanda"),
            ("once_upon_a_time_in_the_west", "Once Upon a Time In the West"),
            ("an_american_in_paris", "An American In Paris"),
            ("planet-of-the-apes", "Planet Of the Apes"),
            ("back to the future", "Back to the Future"),
        ],
    )
    def test_small_words_stay_lowercase(self, identifier, expected):
        """Test small words are lowercase unless they open the title."""
        assert movie_title(identifier) == expected

    def test_repeated_separators(self):
        """Test runs of separators don't produce empty words."""
        assert movie_title("__star__wars__") == "Star Wars"

    def test_empty_identifier(self):
        """Test an empty identifier gives an empty title."""
        assert movie_title("") == ""
