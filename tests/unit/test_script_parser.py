"""Unit tests for the movie script parser."""

from dataclasses import FrozenInstanceError

import pytest

from chatcinema.config import CinemaSettings
from chatcinema.exceptions import ParseError, ScriptLoadError, ScriptNotFoundError
from chatcinema.parser import (
    NARRATOR,
    PALETTE,
    HashedColorPolicy,
    RandomColorPolicy,
    ScriptParser,
    line_delay,
)
from tests.fixtures import BACK_TO_THE_FUTURE


class RecordingPolicy:
    """Color policy stub that records every call."""

    def __init__(self, color: str = "purple") -> None:
        self.color = color
        self.calls: list[tuple[str, int]] = []

    def __call__(self, actor: str, scene_index: int) -> str:
        self.calls.append((actor, scene_index))
        return self.color


class TestScriptParser:
    """Test cases for ScriptParser.parse."""

    @pytest.fixture
    def parser(self):
        """Create a parser with deterministic colors."""
        return ScriptParser(color_policy=HashedColorPolicy())

    def test_parse_scenes_in_source_order(self, parser):
        """Test that N scene markers give N scenes in order."""
        lines = [
            "SCENE: first",
            "A: one",
            "SCENE: second",
            "B: two",
            "SCENE: third",
            "C: three",
        ]

        movie = parser.parse(lines, title="Three Scenes")

        assert movie.title == "Three Scenes"
        assert [scene.intro for scene in movie.scenes] == [
            "<em>first</em>",
            "<em>second</em>",
            "<em>third</em>",
        ]
        assert [scene.lines[0].text for scene in movie.scenes] == [
            "one",
            "two",
            "three",
        ]

    def test_parse_sample_script(self, parser):
        """Test parsing a realistic script."""
        movie = parser.parse(
            BACK_TO_THE_FUTURE.splitlines(),
            title="Back to the Future",
            identifier="back_to_the_future",
        )

        assert movie.identifier == "back_to_the_future"
        assert len(movie.scenes) == 2
        assert movie.line_count == 5
        first = movie.scenes[0]
        assert first.intro == "<em>A parking lot at 1:15 in the morning</em>"
        assert [line.actor for line in first.lines] == ["Doc", "Marty", "Doc"]
        assert set(first.actors) == {"Doc", "Marty"}

    def test_empty_scene_is_kept(self, parser):
        """Test that a scene without dialogue is still a scene."""
        movie = parser.parse(["SCENE: silence", "SCENE: talk", "A: hi"], title="T")

        assert len(movie.scenes) == 2
        assert movie.scenes[0].lines == ()
        assert movie.scenes[0].actors == {}

    @pytest.mark.parametrize(
        ("words", "expected"),
        [(0, 3), (1, 3), (4, 3), (7, 3), (40, 10)],
    )
    def test_line_delay_from_word_count(self, parser, words, expected):
        """Test delay = max(words // 4, 3)."""
        text = " ".join(["word"] * words)
        movie = parser.parse(["SCENE: x", f"A: {text}"], title="T")

        assert movie.scenes[0].lines[0].delay == expected

    @pytest.mark.parametrize(
        ("words", "expected"),
        [(12, 3), (15, 3), (16, 4), (19, 4), (20, 5)],
    )
    def test_line_delay_truncates_before_minimum(self, words, expected):
        """Test that division truncates before the 3 second floor applies."""
        assert line_delay(" ".join(["w"] * words)) == expected

    def test_line_delay_splits_on_any_whitespace(self):
        """Test that tabs and repeated spaces don't create empty words."""
        assert line_delay("a\tb  c   d " * 5) == 5

    def test_scene_keyword_is_case_insensitive(self, parser):
        """Test SCENE matching ignores case and surrounding whitespace."""
        movie = parser.parse(
            ["scene: one", "A: hi", "  Scene  :  two  ", "A: hi"], title="T"
        )

        assert len(movie.scenes) == 2
        assert movie.scenes[1].intro == "<em>two</em>"
        assert all(line.actor == "A" for scene in movie.scenes for line in scene.lines)

    def test_only_first_colon_splits(self, parser):
        """Test dialogue text may contain colons."""
        movie = parser.parse(["SCENE: x", "Doc: It's 1:21 a.m.: late"], title="T")

        line = movie.scenes[0].lines[0]
        assert line.actor == "Doc"
        assert line.text == "It's 1:21 a.m.: late"

    def test_actor_and_text_are_trimmed(self, parser):
        """Test surrounding whitespace is removed from both fields."""
        movie = parser.parse(["SCENE: x", "   Doc   :    Great Scott!   "], title="T")

        line = movie.scenes[0].lines[0]
        assert (line.actor, line.text) == ("Doc", "Great Scott!")

    def test_trailing_newlines_are_ignored(self, parser):
        """Test lines read from a file with CRLF endings."""
        movie = parser.parse(["SCENE: x\r\n", "Doc: hi\n"], title="T")

        assert movie.scenes[0].intro == "<em>x</em>"
        assert movie.scenes[0].lines[0].text == "hi"

    def test_dialogue_before_scene_is_error(self, parser):
        """Test a line before any SCENE marker is rejected, not dropped."""
        with pytest.raises(ParseError) as exc_info:
            parser.parse(["Doc: too early", "SCENE: x"], title="T")

        assert exc_info.value.details["line_number"] == 1
        assert exc_info.value.details["line"] == "Doc: too early"

    def test_missing_separator_is_error(self, parser):
        """Test a line without a colon is rejected."""
        with pytest.raises(ParseError, match="separator at line 2"):
            parser.parse(["SCENE: x", "Doc says hi"], title="T")

    def test_blank_line_is_error(self, parser):
        """Test a blank line is rejected."""
        with pytest.raises(ParseError) as exc_info:
            parser.parse(["SCENE: x", "   ", "Doc: hi"], title="T")

        assert exc_info.value.details["line_number"] == 2

    def test_missing_actor_is_error(self, parser):
        """Test a line with an empty actor name is rejected."""
        with pytest.raises(ParseError, match="Missing actor name"):
            parser.parse(["SCENE: x", ": hello"], title="T")

    def test_empty_input_is_error(self, parser):
        """Test a script without scenes is rejected."""
        with pytest.raises(ParseError, match="no scenes"):
            parser.parse([], title="T")

    def test_intro_line_has_no_delay(self, parser):
        """Test scene intros are spoken by the narrator with zero delay."""
        movie = parser.parse(["SCENE: a long description " * 10], title="T")

        intro = movie.scenes[0].intro_line
        assert intro.actor == NARRATOR
        assert intro.delay == 0.0
        assert intro.text == movie.scenes[0].intro

    def test_character_named_narrator(self):
        """Test a script character called Narrator doesn't take over intros."""
        parser = ScriptParser(color_policy=RecordingPolicy(color="red"))

        movie = parser.parse(
            ["SCENE: The bridge of death", "Narrator: And so they rode on."],
            title="The Holy Grail",
        )

        scene = movie.scenes[0]
        dialogue = scene.lines[0]
        assert scene.intro_line.is_intro
        assert not dialogue.is_intro
        assert scene.color_of(scene.intro_line) == "gray"
        assert scene.color_of(dialogue) == "red"
        assert scene.color_for(NARRATOR) == "red"

    def test_every_line_actor_has_a_color(self, parser):
        """Test each actor used in a scene has an entry in its color table."""
        movie = parser.parse(BACK_TO_THE_FUTURE.splitlines(), title="T")

        for scene in movie.scenes:
            for line in scene.lines:
                assert line.actor in scene.actors
                assert scene.color_for(line.actor) in PALETTE

    def test_actor_color_is_stable_within_scene(self):
        """Test the same actor keeps one color for every line of a scene."""
        parser = ScriptParser(color_policy=RandomColorPolicy(seed=7))
        lines = ["SCENE: x"] + [f"Actor{i % 3}: line {i}" for i in range(30)]

        movie = parser.parse(lines, title="T")

        scene = movie.scenes[0]
        for line in scene.lines:
            assert scene.color_for(line.actor) == scene.actors[line.actor]

    def test_color_policy_called_once_per_actor_per_scene(self):
        """Test colors are assigned on first appearance only."""
        policy = RecordingPolicy()
        parser = ScriptParser(color_policy=policy)

        parser.parse(
            ["SCENE: one", "A: 1", "B: 2", "A: 3", "SCENE: two", "A: 4", "A: 5"],
            title="T",
        )

        assert policy.calls == [("A", 0), ("B", 0), ("A", 1)]

    def test_movie_is_immutable(self, parser):
        """Test parsed values cannot be modified."""
        movie = parser.parse(["SCENE: x", "A: hi"], title="T")
        scene = movie.scenes[0]

        with pytest.raises(FrozenInstanceError):
            scene.lines[0].delay = 0  # type: ignore[misc]
        with pytest.raises(TypeError):
            scene.actors["B"] = "red"  # type: ignore[index]

    def test_runtime_sums_line_delays(self, parser):
        """Test movie runtime excludes the zero-delay intros."""
        movie = parser.parse(["SCENE: x", "A: hi", "B: " + "w " * 40], title="T")

        assert movie.runtime == 13

    def test_custom_timing(self):
        """Test parser timing constants are configurable."""
        parser = ScriptParser(words_per_second=2, min_delay=1)
        movie = parser.parse(["SCENE: x", "A: one two three four five"], title="T")

        assert movie.scenes[0].lines[0].delay == 2

    def test_invalid_words_per_second(self):
        """Test words_per_second must be positive."""
        with pytest.raises(ValueError):
            ScriptParser(words_per_second=0)

    def test_from_settings(self):
        """Test parser creation from settings."""
        settings = CinemaSettings(
            color_policy="hashed", min_line_delay=5, words_per_second=2
        )
        parser = ScriptParser.from_settings(settings)

        assert isinstance(parser.color_policy, HashedColorPolicy)
        assert parser.min_delay == 5
        assert parser.words_per_second == 2


class TestParseFile:
    """Test cases for ScriptParser.parse_file."""

    def test_parse_file_derives_title(self, tmp_path):
        """Test the title comes from the movie directory name."""
        script = tmp_path / "back_to_the_future" / "script.txt"
        script.parent.mkdir()
        script.write_text(BACK_TO_THE_FUTURE, encoding="utf-8")

        movie = ScriptParser().parse_file(script)

        assert movie.title == "Back to the Future"
        assert movie.identifier == "back_to_the_future"
        assert len(movie.scenes) == 2

    def test_parse_file_crlf(self, tmp_path):
        """Test Windows line endings."""
        script = tmp_path / "hackers" / "script.txt"
        script.parent.mkdir()
        script.write_bytes(b"SCENE: club\r\nCrash: hi\r\n")

        movie = ScriptParser().parse_file(script, title="Hackers!")

        assert movie.title == "Hackers!"
        assert movie.scenes[0].lines[0].text == "hi"

    def test_parse_file_missing(self, tmp_path):
        """Test a missing file is a load error."""
        with pytest.raises(ScriptNotFoundError):
            ScriptParser().parse_file(tmp_path / "nope" / "script.txt")

    def test_parse_file_not_utf8(self, tmp_path):
        """Test an undecodable file is a load error."""
        script = tmp_path / "bad" / "script.txt"
        script.parent.mkdir()
        script.write_bytes(b"SCENE: \xff\xfe\xfa")

        with pytest.raises(ScriptLoadError):
            ScriptParser().parse_file(script)
