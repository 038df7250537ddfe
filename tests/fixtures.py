"""Sample scripts and movie builders shared by the tests."""

from chatcinema.parser import Line, Movie, Scene

BACK_TO_THE_FUTURE = """\
SCENE: A parking lot at 1:15 in the morning
Doc: Marty! You made it!
Marty: Doc, what is all this?
Doc: Never mind that now, never mind that now.
SCENE: Inside the DeLorean
Marty: Wait a minute, Doc. You built a time machine out of a DeLorean?
Doc: If you're gonna build a time machine into a car, why not do it with style?
"""

HACKERS = """\
SCENE: A crowded club
Crash Override: Mess with the best, die like the rest.
Acid Burn: Never send a boy to do a woman's job.
"""


def make_movie(scenes: int = 3, lines: int = 3, delay: float = 0.0) -> Movie:
    """Build a movie with numbered scenes and lines L1..Ln per scene."""
    built = []
    for scene_number in range(1, scenes + 1):
        dialogue = tuple(
            Line(actor=f"Actor{n}", text=f"S{scene_number}L{n}", delay=delay)
            for n in range(1, lines + 1)
        )
        built.append(
            Scene(
                intro=f"<em>Scene {scene_number}</em>",
                actors={line.actor: "green" for line in dialogue},
                lines=dialogue,
            )
        )
    return Movie(title="Test Movie", scenes=tuple(built), identifier="test_movie")
