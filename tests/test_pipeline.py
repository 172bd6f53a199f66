import pytest
from src.fingerspell.config import Config, TypingConfig
from src.fingerspell.landmarks import HandLandmarks
from src.fingerspell.pipeline import SignTyper
from src.fingerspell.symbols import NO_HAND, OPEN_HAND
from src.fingerspell.text_buffer import TextBuffer

THRESHOLD = 15


@pytest.fixture
def typer():
    return SignTyper(Config(typing=TypingConfig(window_size=10, stable_threshold=THRESHOLD)))


def hold(typer, points, frames):
    results = []
    for _ in range(frames):
        results.append(typer.step(HandLandmarks(landmarks=points)))
    return results


def test_letter_typed_once(typer, pose):
    # Scenario A: no hand, then a steady D
    typer.step(None)
    hold(typer, pose("D"), THRESHOLD + 1)
    assert typer.text == "D"

    hold(typer, pose("D"), 100)
    assert typer.text == "D"


def test_commit_lands_on_threshold_frame(typer, pose):
    results = hold(typer, pose("D"), THRESHOLD)
    assert [r.committed for r in results[:-1]] == [None] * (THRESHOLD - 1)
    assert results[-1].committed == "D"
    assert results[-1].stable_count == THRESHOLD


def test_open_hand_between_letters_types_twice(typer, pose):
    # Scenario B: D, open hand long enough to win the vote, D again
    hold(typer, pose("D"), THRESHOLD + 1)
    results = hold(typer, pose("OPEN_HAND"), 6)
    assert results[-1].smoothed == OPEN_HAND
    hold(typer, pose("D"), THRESHOLD + 10)
    assert typer.text == "DD"


def test_single_flicker_is_smoothed_away(typer, pose):
    hold(typer, pose("D"), THRESHOLD + 1)
    results = hold(typer, pose("OPEN_HAND"), 1)
    assert results[0].raw == OPEN_HAND
    assert results[0].smoothed == "D"
    hold(typer, pose("D"), THRESHOLD + 10)
    assert typer.text == "D"


def test_single_neutral_frame_without_smoothing(pose):
    typer = SignTyper(Config(typing=TypingConfig(window_size=1, stable_threshold=THRESHOLD)))
    hold(typer, pose("D"), THRESHOLD)
    hold(typer, pose("OPEN_HAND"), 1)
    hold(typer, pose("D"), THRESHOLD)
    assert typer.text == "DD"


def test_spelling_a_word(typer, pose):
    for letter in "HI":
        hold(typer, pose(letter), THRESHOLD + 10)
    assert typer.text == "HI"


def test_auto_space_on_hand_lost(pose):
    # Scenario C
    typer = SignTyper(text=TextBuffer("HI"))
    hold(typer, pose("OPEN_HAND"), 1)
    result = typer.step(None)
    assert result.committed == " "
    assert typer.text == "HI "

    for _ in range(10):
        typer.step(None)
    assert typer.text == "HI "


def test_auto_space_not_doubled(pose):
    typer = SignTyper(text=TextBuffer("HI "))
    hold(typer, pose("OPEN_HAND"), 3)
    typer.step(None)
    assert typer.text == "HI "


def test_auto_space_skipped_on_empty_text(typer, pose):
    hold(typer, pose("OPEN_HAND"), 3)
    typer.step(None)
    assert typer.text == ""


def test_auto_space_once_per_edge(pose):
    typer = SignTyper(text=TextBuffer("A"))
    for _ in range(3):
        hold(typer, pose("OPEN_HAND"), 2)
        typer.step(None)
        typer.step(None)
        typer.buffer.append("B")
    assert typer.text == "A B B B"


def test_auto_space_disabled(pose):
    typer = SignTyper(Config(typing=TypingConfig(auto_space=False)), text=TextBuffer("HI"))
    hold(typer, pose("OPEN_HAND"), 1)
    typer.step(None)
    assert typer.text == "HI"


def test_no_hand_result(typer):
    result = typer.step(None)
    assert result.raw == NO_HAND
    assert result.smoothed == NO_HAND
    assert result.status == "Show hand"
    assert not result.hand_present


def test_malformed_hand_is_no_hand(pose):
    typer = SignTyper(text=TextBuffer("AB"))
    hold(typer, pose("D"), 1)
    result = typer.step(HandLandmarks(landmarks=[(0.5, 0.5, 0.0)] * 5))
    assert not result.hand_present
    assert typer.text == "AB "


def test_hand_lost_allows_retyping(typer, pose):
    hold(typer, pose("D"), THRESHOLD + 1)
    typer.step(None)
    hold(typer, pose("D"), THRESHOLD + 10)
    assert typer.text == "D D"


def test_backspace_clears_marker(typer, pose):
    hold(typer, pose("D"), THRESHOLD + 1)
    typer.backspace()
    assert typer.text == ""
    assert typer.last_committed == ""
    # Still holding D, so it is typed again on the next frame
    hold(typer, pose("D"), 1)
    assert typer.text == "D"


def test_clear_and_space_clear_marker(typer, pose):
    hold(typer, pose("D"), THRESHOLD + 1)
    typer.space()
    assert typer.text == "D "
    hold(typer, pose("D"), 1)
    assert typer.text == "D D"

    typer.clear()
    assert typer.text == ""
    hold(typer, pose("D"), 1)
    assert typer.text == "D"


def wave_frames(pose, cycles=4):
    frames = []
    for i in range(cycles + 2):
        dx = 0.05 if i % 2 else 0.0
        frames.append(pose("OPEN_HAND", offset=(dx, 0.0)))
    return frames


def test_wave_types_word(typer, pose):
    results = [typer.step(HandLandmarks(landmarks=p)) for p in wave_frames(pose)]
    assert results[-1].raw == "HELLO"
    assert results[-1].committed == "HELLO"
    assert typer.text == "HELLO "

    # Holding the open hand afterwards adds nothing
    hold(typer, pose("OPEN_HAND"), 30)
    assert typer.text == "HELLO "


def test_wave_word_spaced_from_letters(pose):
    typer = SignTyper(text=TextBuffer("HI"))
    for p in wave_frames(pose):
        typer.step(HandLandmarks(landmarks=p))
    assert typer.text == "HI HELLO "


def test_wave_interrupted_by_fist(typer, pose):
    frames = wave_frames(pose)
    for p in frames[:4]:
        typer.step(HandLandmarks(landmarks=p))
    typer.step(HandLandmarks(landmarks=pose("S")))
    for p in frames[:4]:
        typer.step(HandLandmarks(landmarks=p))
    assert "HELLO" not in typer.text


def test_continuous_waving_types_word_once(typer, pose):
    frames = wave_frames(pose, cycles=38)
    results = [typer.step(HandLandmarks(landmarks=p)) for p in frames]
    assert [r.raw for r in results].count("HELLO") > 1
    assert typer.text == "HELLO "


def test_wave_again_after_hand_lost(typer, pose):
    for p in wave_frames(pose):
        typer.step(HandLandmarks(landmarks=p))
    typer.step(None)
    for p in wave_frames(pose):
        typer.step(HandLandmarks(landmarks=p))
    assert typer.text == "HELLO HELLO "
