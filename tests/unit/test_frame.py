"""Tests for Frame capture and rendering."""

import inspect
import json

import pytest

from stackerr.models.frame import Frame, RenderMode, funcname

INIT_FRAME, INIT_LINE = Frame.capture(), inspect.currentframe().f_lineno  # type: ignore[union-attr]


def _lineno() -> int:
    """Return the line the caller is executing."""
    return inspect.currentframe().f_back.f_lineno  # type: ignore[union-attr]


class Receiver:
    """Gives frames captured inside methods."""

    def here(self) -> Frame:
        return Frame.capture()

    @classmethod
    def made(cls) -> Frame:
        return Frame.capture()


class TestRenderMode:
    """Test RenderMode parsing."""

    def test_parse_known_specs(self) -> None:
        """Test every format spec maps to its mode."""
        assert RenderMode.parse("s") is RenderMode.SHORT
        assert RenderMode.parse("+s") is RenderMode.LONG
        assert RenderMode.parse("d") is RenderMode.LINE
        assert RenderMode.parse("n") is RenderMode.NAME
        assert RenderMode.parse("v") is RenderMode.DEFAULT
        assert RenderMode.parse("+v") is RenderMode.EXTENDED
        assert RenderMode.parse("#v") is RenderMode.DEBUG
        assert RenderMode.parse("q") is RenderMode.QUOTED

    def test_parse_empty_is_default(self) -> None:
        """Test the empty spec used by str.format is DEFAULT."""
        assert RenderMode.parse("") is RenderMode.DEFAULT

    def test_parse_passes_modes_through(self) -> None:
        """Test a RenderMode is returned unchanged."""
        assert RenderMode.parse(RenderMode.EXTENDED) is RenderMode.EXTENDED

    def test_parse_unknown_raises(self) -> None:
        """Test an unknown spec is rejected like an invalid format spec."""
        with pytest.raises(ValueError, match="Unknown render mode"):
            RenderMode.parse("x")


class TestFuncname:
    """Test module-path stripping of qualified names."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("", ""),
            ("runtime.main", "main"),
            ("funcname", "funcname"),
            ("io.copyBuffer", "copyBuffer"),
            ("pkg.path.Type.Method", "Method"),
            ("main.(*R).Write", "(*R).Write"),
            ("pkg.(*Type).Method", "(*Type).Method"),
            ("mod.outer.<locals>.inner", "inner"),
            ("mod.<lambda>", "<lambda>"),
        ],
    )
    def test_funcname(self, name: str, expected: str) -> None:
        """Test the last unbracketed segment is kept."""
        assert funcname(name) == expected

    def test_name_mode_is_not_funcname(self) -> None:
        """Test NAME keeps the class that funcname would strip."""
        frame = Receiver().here()
        assert format(frame, "n") == "Receiver.here"
        assert funcname(frame.symbol().name) == "here"


class TestFrameCapture:
    """Test Frame.capture."""

    def test_capture_points_at_caller(self) -> None:
        """Test the captured frame is the line calling capture."""
        frame, line = Frame.capture(), _lineno()
        assert frame.symbol().line == line
        assert frame.symbol().qualname == "TestFrameCapture.test_capture_points_at_caller"

    def test_capture_skip(self) -> None:
        """Test skip moves the frame up to the helper's caller."""

        def helper() -> Frame:
            return Frame.capture(skip=1)

        frame, line = helper(), _lineno()
        assert frame.symbol().line == line

    def test_capture_skip_past_stack_is_unknown(self) -> None:
        """Test skipping more frames than exist yields the unknown frame."""
        assert Frame.capture(skip=100_000).is_unknown

    def test_module_level_capture(self) -> None:
        """Test a frame captured at import time resolves to the module body."""
        sym = INIT_FRAME.symbol()
        assert sym.qualname == "<module>"
        assert sym.line == INIT_LINE

    def test_frames_are_immutable_values(self) -> None:
        """Test frames compare and hash by pc."""
        assert Frame(5) == Frame(5)
        assert hash(Frame(5)) == hash(Frame(5))
        with pytest.raises(AttributeError):
            Frame(5).pc = 6  # type: ignore[misc]


class TestFrameRender:
    """Test rendering known frames."""

    def test_short(self) -> None:
        """Test SHORT is the file base name."""
        assert format(INIT_FRAME, "s") == "test_frame.py"

    def test_long(self) -> None:
        """Test LONG is qualified function, newline, tab, full path."""
        name, path = format(INIT_FRAME, "+s").split("\n\t")
        assert name == f"{__name__}.<module>"
        assert path.endswith("test_frame.py")

    def test_line(self) -> None:
        """Test LINE is the decimal line number."""
        assert format(INIT_FRAME, "d") == str(INIT_LINE)

    def test_default(self) -> None:
        """Test DEFAULT is file:line, for both format and str."""
        assert format(INIT_FRAME, "v") == f"test_frame.py:{INIT_LINE}"
        assert f"{INIT_FRAME}" == f"test_frame.py:{INIT_LINE}"
        assert str(INIT_FRAME) == f"test_frame.py:{INIT_LINE}"

    def test_extended(self) -> None:
        """Test EXTENDED is qualified function, newline, tab, path:line."""
        frame, line = Frame.capture(), _lineno()
        name, location = frame.render(RenderMode.EXTENDED).split("\n\t")
        assert name == f"{__name__}.TestFrameRender.test_extended"
        assert location.endswith(f"test_frame.py:{line}")

    def test_name_of_function(self) -> None:
        """Test NAME drops the module path."""
        frame = Frame.capture()
        assert format(frame, "n") == "TestFrameRender.test_name_of_function"

    def test_name_keeps_class_prefix(self) -> None:
        """Test NAME keeps the class for methods and classmethods."""
        assert format(Receiver().here(), "n") == "Receiver.here"
        assert format(Receiver.made(), "n") == "Receiver.made"

    def test_name_of_nested_function(self) -> None:
        """Test NAME shows the enclosing scopes of a closure."""

        def inner() -> Frame:
            return Frame.capture()

        assert format(inner(), "n") == "TestFrameRender.test_name_of_nested_function.<locals>.inner"

    def test_debug_and_quoted_fall_back_to_default(self) -> None:
        """Test modes without a frame-specific form render as DEFAULT."""
        assert format(INIT_FRAME, "#v") == format(INIT_FRAME, "v")
        assert format(INIT_FRAME, "q") == format(INIT_FRAME, "v")

    def test_render_is_idempotent(self) -> None:
        """Test rendering twice gives identical text."""
        for mode in RenderMode:
            assert INIT_FRAME.render(mode) == INIT_FRAME.render(mode)


class TestUnknownFrame:
    """Test the placeholder rendering of unknown frames."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (RenderMode.SHORT, "unknown"),
            (RenderMode.LONG, "unknown"),
            (RenderMode.LINE, "0"),
            (RenderMode.NAME, "unknown"),
            (RenderMode.DEFAULT, "unknown:0"),
            (RenderMode.EXTENDED, "unknown:0"),
            (RenderMode.DEBUG, "unknown:0"),
            (RenderMode.QUOTED, "unknown:0"),
        ],
    )
    def test_zero_frame(self, mode: RenderMode, expected: str) -> None:
        """Test Frame() renders fixed placeholders in every mode."""
        assert Frame().render(mode) == expected

    def test_unregistered_pc_is_unknown(self) -> None:
        """Test a pc never handed out renders like Frame()."""
        frame = Frame(10**12)
        assert frame.is_unknown
        assert str(frame) == "unknown:0"


class TestFrameSerialization:
    """Test text and JSON serialization."""

    def test_to_text(self) -> None:
        """Test text form is qualified name, space, path:line."""
        text = INIT_FRAME.to_text()
        name, location = text.split(" ", 1)
        assert name == f"{__name__}.<module>"
        assert location.endswith(f"test_frame.py:{INIT_LINE}")

    def test_to_text_unknown(self) -> None:
        """Test unknown frames serialize as 'unknown'."""
        assert Frame().to_text() == "unknown"

    def test_to_json(self) -> None:
        """Test JSON form is the text form as a JSON string."""
        assert json.loads(INIT_FRAME.to_json()) == INIT_FRAME.to_text()
        assert Frame().to_json() == '"unknown"'
