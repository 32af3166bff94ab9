import pytest

from hasm.core.translator import Translator, translate
from hasm.utils.errors import InvalidLiteral, StructuralError, UnexpectedEndOfInput


def lines(source, **options):
    return translate(source, **options).splitlines()


HELLO = """
$global _start;
$section text {
    label _start {
        $define SYS_EXIT 60
        $pstk
        move rax <- &value;
        write(1, &message, 0xD);
        move rax <- SYS_EXIT;
        $fstk
        $return
    }
}
$section data {
    label message {
        db 'Hello, World!', 0;
    }
    label size { equ 13 }
}
"""


def test_end_to_end():
    source = "$global _start; $section text { label _start { move rax <- 1; } }"
    assert lines(source) == ["global _start", "section .text", "_start:", "mov rax, 1"]


def test_full_program():
    assert lines(HELLO) == [
        "global _start",
        "section .text",
        "_start:",
        "push rbp",
        "mov rbp, rsp",
        "mov rax, [value]",
        "push 13",
        "push [message]",
        "push 1",
        "call write",
        "mov rax, 60",
        "mov rsp, rbp",
        "pop rbp",
        "ret",
        "section .data",
        "message:",
        "db 'Hello, World!', 0",
        "size equ 13",
    ]


def test_move_lowering():
    assert lines("move rax <- 0x10") == ["mov rax, 16"]
    assert lines("move rax <- &value") == ["mov rax, [value]"]
    assert lines("move rax <- rbx;") == ["mov rax, rbx"]
    assert lines("move rax <- 0b11;") == ["mov rax, 3"]


def test_call_pushes_last_argument_first():
    assert lines("foo(rax, rdi, 0x5)") == ["push 5", "push rdi", "push rax", "call foo"]
    assert lines("halt();") == ["call halt"]
    assert lines("$define FD 1 write(FD,&buf,0b11);") == [
        "push 3", "push [buf]", "push 1", "call write",
    ]


def test_macro_not_visible_in_nested_block():
    source = """
    $section text {
        $define VALUE 42
        move rax <- VALUE;
        label inner { move rbx <- VALUE; }
        label redefined { $define VALUE 7 move rcx <- VALUE; }
    }
    """
    assert lines(source) == [
        "section .text",
        "mov rax, 42",
        "inner:",
        "mov rbx, VALUE",
        "redefined:",
        "mov rcx, 7",
    ]


def test_macro_inheritance_is_opt_in():
    source = "$define VALUE 42 label inner { move rbx <- VALUE; $define VALUE 1 } move rax <- VALUE;"
    assert lines(source, inherit_macros=True) == ["inner:", "mov rbx, 42", "mov rax, 42"]


def test_macros_apply_only_to_later_whole_tokens():
    assert lines("move rax <- X; $define X 1 move rbx <- X;") == ["mov rax, X", "mov rbx, 1"]
    assert lines("$define A 1 move rcx <- AB;") == ["mov rcx, AB"]
    assert lines("$define msg 5 db 'msg', 0;") == ["db 'msg', 0"]
    assert lines("$define X 1 $undef X move rax <- X") == ["mov rax, X"]


def test_generic_operands():
    assert lines("$define COUNT 0x10 add rcx <- COUNT;") == ["add rcx, 16"]
    assert lines("lea rdi <- &message;") == ["lea rdi, [message]"]
    assert lines("syscall; xor rax <- rax;") == ["syscall", "xor rax, rax"]


def test_stack_frame_pseudo_instructions():
    assert lines("$pstk $fstk $return") == ["push rbp", "mov rbp, rsp", "mov rsp, rbp", "pop rbp", "ret"]


def test_directives():
    assert lines("$section DATA { }") == ["section .data"]
    assert lines("$extern puts;") == ["extern puts"]
    assert lines("$define N 0x20 $equ BUF_SIZE N") == ["BUF_SIZE equ 32"]


def test_label_with_equ_block_has_no_colon():
    assert lines("label size { equ 10 }") == ["size equ 10"]
    assert lines("label main { ret; }") == ["main:", "ret"]


def test_block_comment_is_not_interpreted():
    assert lines("/* $define X 1 move rax <- 2 */ move rax <- X") == ["mov rax, X"]
    assert lines("/**/ ret;") == ["ret"]
    with pytest.raises(UnexpectedEndOfInput):
        translate("/* never closed")


def test_string_literals():
    assert lines("db 'Hello, World!', 0;") == ["db 'Hello, World!', 0"]
    assert lines('db "a  b";') == ['db "a b"']
    with pytest.raises(UnexpectedEndOfInput):
        translate("db 'open")


def test_fatal_errors():
    with pytest.raises(StructuralError):
        translate("$section text label")
    with pytest.raises(StructuralError):
        translate("$section text")
    with pytest.raises(UnexpectedEndOfInput):
        translate("$define X")
    with pytest.raises(UnexpectedEndOfInput):
        translate("move rax <-")
    with pytest.raises(InvalidLiteral):
        translate("$section text { label a { move rax <- 0xZZ } }")


def test_unmatched_braces_are_lenient_by_default():
    translator = Translator("$section text { ret; } }")
    assert translator.translate().splitlines() == ["section .text", "ret"]
    assert translator.diagnostics.warning_count == 1

    assert lines("$section text { ret;") == ["section .text", "ret"]

    with pytest.raises(StructuralError):
        translate("$section text { ret; } }", strict_braces=True)
    with pytest.raises(StructuralError):
        translate("$section text { ret;", strict_braces=True)


def test_unknown_directive_passes_through_with_warning():
    translator = Translator("$foo bar;")
    assert translator.translate() == "$foo bar\n"
    assert translator.diagnostics.warning_count == 1


def test_child_warnings_reach_the_root():
    translator = Translator("label a { label b { $nope; } }")
    translator.translate()
    assert translator.diagnostics.warning_count == 1


def test_refeeding_output_does_not_crash():
    once = translate(HELLO)
    twice = translate(once)
    assert "call write" in twice
    translate(twice)


def test_macros_apply_to_directive_operands():
    source = "$define ENTRY _start $global ENTRY; $section text { } label ENTRY { ret; }"
    assert lines(source) == ["global _start", "section .text", "_start:", "ret"]
    assert lines("$define KIND DATA $section KIND { }") == ["section .data"]
    assert lines("$define LIBC_PUTS puts $extern LIBC_PUTS;") == ["extern puts"]
    assert lines("$define NAME SIZE $equ NAME 4") == ["SIZE equ 4"]
    assert lines("$define NAME size label NAME { equ 4 }") == ["size equ 4"]


def test_macro_expanding_to_a_statement_keyword():
    assert lines("$define M move M rax <- 1;") == ["mov rax, 1"]
    assert lines("$define RET $return RET;") == ["ret"]
    assert lines("$define A B $define B C mov A;") == ["mov B"]


def test_generic_operand_edge_cases():
    assert lines("push &value; ret;") == ["push [value]", "ret"]
    with pytest.raises(InvalidLiteral):
        translate("db 0xZZ;")
