import os

from hypothesis import settings
from hypothesis import strategies as st

from fretviz.note import Note
from fretviz.pitch import Accidental, PitchClass


def configure_hypo() -> None:
    settings.register_profile("fast", max_examples=25)
    if os.environ.get("HYPO_SLOW") != "1":
        settings.load_profile("fast")


@st.composite
def note_strategy(draw: st.DrawFn) -> Note:
    return Note(
        draw(st.sampled_from(list(PitchClass))),
        draw(st.sampled_from(list(Accidental))),
        draw(st.integers(min_value=-2, max_value=9)),
    )
