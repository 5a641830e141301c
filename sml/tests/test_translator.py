import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sml.bytecode import MAX_INT, Instruction, Opcode
from sml.labels import Labels
from sml.translator import LineScanner, Translator, parse_int
from sml.vm_errors import TranslationError


def translate(lines, strict=False):
    labels, program = Labels(), []
    Translator(strict=strict).translate(lines, labels, program)
    return labels, program


def test_scanner_consumes_words_left_to_right():
    scanner = LineScanner("  f1 \t add 1  2\t3  ")
    assert [scanner.scan() for _ in range(6)] == ["f1", "add", "1", "2", "3", ""]
    assert scanner.scan() == ""


def test_scan_int_returns_sentinel_for_missing_or_malformed_words():
    scanner = LineScanner("-7 +4 x9 99999999999")
    assert scanner.scan_int() == -7
    assert scanner.scan_int() == 4
    assert scanner.scan_int() == MAX_INT
    assert scanner.scan_int() == MAX_INT
    assert scanner.scan_int() == MAX_INT


def test_parse_int_rejects_non_ascii_forms():
    assert parse_int("1_000") is None
    assert parse_int("") is None
    assert parse_int(str(MAX_INT)) == MAX_INT


def test_arity_table_builds_each_variant():
    _, program = translate([
        "a add 1 2 3",
        "b sub 4 5 6",
        "c mul 7 8 9",
        "d div 10 11 12",
        "e lin 3 -42",
        "f out 3",
        "g bnz 3 a",
    ])
    assert program == [
        Instruction("a", Opcode.ADD, (1, 2, 3)),
        Instruction("b", Opcode.SUB, (4, 5, 6)),
        Instruction("c", Opcode.MUL, (7, 8, 9)),
        Instruction("d", Opcode.DIV, (10, 11, 12)),
        Instruction("e", Opcode.LIN, (3, -42)),
        Instruction("f", Opcode.OUT, (3,)),
        Instruction("g", Opcode.BNZ, (3, "a")),
    ]


def test_labels_bind_to_program_length_at_insertion():
    labels, program = translate(["", "l1 lin 0 1", "   ", "l2 out 0", "l3 nop"])
    assert len(program) == 3
    assert labels.get_address("l1") == 0
    assert labels.get_address("l2") == 1
    assert labels.get_address("l3") == 2
    assert list(labels) == ["l1", "l2", "l3"]


def test_first_token_is_always_the_label():
    labels, program = translate(["add 0 1 2"])
    assert "add" in labels
    # "0" is taken as the opcode, so the line degrades to a no-op
    assert program[0].opcode is Opcode.NOOP
    assert program[0].label == "add"


def test_unknown_opcode_becomes_noop_keeping_text():
    _, program = translate(["x9 jmp somewhere  else"])
    inst = program[0]
    assert inst.opcode is Opcode.NOOP
    assert str(inst).startswith("x9:")
    assert "jmp somewhere  else" in str(inst)


def test_label_only_line_is_an_empty_noop():
    labels, program = translate(["lonely"])
    assert program == [Instruction("lonely", Opcode.NOOP, ("",))]
    assert str(program[0]) == "lonely:"


def test_missing_operands_use_sentinel():
    _, program = translate(["l out", "m add 1 two"])
    assert program[0].args == (MAX_INT,)
    assert program[1].args == (1, MAX_INT, MAX_INT)


def test_bnz_missing_target_label_is_empty():
    _, program = translate(["l bnz 1"])
    assert program[0].args == (1, "")


def test_strict_mode_rejects_malformed_operands():
    with pytest.raises(TranslationError) as excinfo:
        translate(["ok lin 1 1", "bad add 1 two 3"], strict=True)
    assert excinfo.value.line_number == 2
    assert "two" in str(excinfo.value)


def test_strict_mode_still_accepts_unknown_opcodes():
    _, program = translate(["n whatever 1 2"], strict=True)
    assert program[0].opcode is Opcode.NOOP


def test_translation_resets_previous_content():
    labels, program = Labels(), []
    translator = Translator()
    translator.translate(["old lin 0 1"], labels, program)
    translator.translate(["new out 0"], labels, program)
    assert "old" not in labels
    assert [str(inst) for inst in program] == ["new: out 0"]


def test_duplicate_labels_keep_first_address():
    labels, program = translate(["l lin 0 1", "l lin 0 2"])
    assert len(program) == 2
    assert labels.get_address("l") == 0


def test_noop_keeps_remainder_of_line_verbatim():
    _, program = translate(["q  zap\t1  2 "])
    assert program[0].args == ("  zap\t1  2",)
    assert str(program[0]) == "q: zap\t1  2"


def test_rendering_has_no_trailing_space_for_missing_operand():
    _, program = translate(["l bnz 1"])
    assert str(program[0]) == "l: bnz 1"
