import traceback

import pytest

from mvc_console.domain.exceptions import TemplateError
from mvc_console.view.templates import (
    DEFAULT_MESSAGE,
    DEFAULT_PREVIOUS_MESSAGE,
    ExceptionRecord,
    FunctionTemplate,
    LiteralTemplate,
    as_template,
    substitute,
)


def _raised(exc):
    try:
        raise exc
    except BaseException as caught:
        return caught


def test_default_templates_layout():
    lines = DEFAULT_MESSAGE.split("\n")
    assert lines[0] == "=" * 70
    assert lines[1] == "   The application has thrown an exception!"
    assert ":file::line" in lines
    assert DEFAULT_MESSAGE.endswith(":previous\n")
    assert DEFAULT_PREVIOUS_MESSAGE.endswith(":stack\n")
    assert ":previous" not in DEFAULT_PREVIOUS_MESSAGE


def test_substitute_applies_placeholders_in_order():
    # :message 先于 :line 替换，消息里的 :line 会被继续替换
    values = {":message": "bad value near :line", ":line": "7"}
    assert substitute(":message@:line", values) == "bad value near 7@7"

    # :line 晚于 :message，替换进去的 :message 不再处理
    values = {":message": "m", ":line": ":message"}
    assert substitute(":line", values) == ":message"


def test_substitute_keeps_unknown_placeholders():
    assert substitute(":className :other", {":className": "X"}) == "X :other"


def test_record_fields_from_raised_exception():
    exc = _raised(OSError(2, "No such file"))
    record = ExceptionRecord.from_exception(exc)
    assert record.class_name == "FileNotFoundError"
    assert record.code == 2
    assert record.file == __file__
    assert record.line > 0
    assert record.stack == "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n")
    assert record.previous is None


def test_record_for_unraised_exception():
    record = ExceptionRecord.from_exception(ValueError("never raised"))
    assert record.file == ""
    assert record.line == 0
    assert record.stack == ""
    assert record.placeholders()[":line"] == "0"


def test_record_qualified_class_name():
    class LocalError(Exception):
        pass

    record = ExceptionRecord.from_exception(LocalError("x"))
    assert record.class_name.endswith("LocalError")
    assert record.class_name.startswith(LocalError.__module__ + ".")


def test_record_chain_nearest_to_root():
    try:
        try:
            try:
                raise LookupError("root")
            except LookupError as root:
                raise ValueError("middle") from root
        except ValueError:
            raise RuntimeError("top")
    except RuntimeError as top:
        record = ExceptionRecord.from_exception(top)

    assert [r.message for r in record.chain()] == ["middle", "root"]


def test_record_chain_respects_suppressed_context():
    try:
        try:
            raise KeyError("hidden")
        except KeyError:
            raise ValueError("visible") from None
    except ValueError as exc:
        record = ExceptionRecord.from_exception(exc)
    assert list(record.chain()) == []


def test_record_for_single_exception_has_no_previous():
    record = ExceptionRecord.from_exception(_raised(KeyError("k")))
    assert record.class_name == "KeyError"
    assert record.previous is None
    assert list(record.chain()) == []


def test_record_chain_stops_on_cycle():
    first = ValueError("first")
    second = TypeError("second")
    first.__cause__ = second
    second.__cause__ = first
    record = ExceptionRecord.from_exception(first)
    assert [r.message for r in record.chain()] == ["second"]


def test_as_template_variants():
    assert as_template("text") == LiteralTemplate("text")

    def fmt(exc, display):
        return "x"

    assert as_template(fmt) == FunctionTemplate(fmt)
    literal = LiteralTemplate("a")
    assert as_template(literal) is literal
    with pytest.raises(TemplateError) as info:
        as_template(42)
    assert info.value.code == "TEMPLATE_INVALID"
