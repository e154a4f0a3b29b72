from utopiascript.interpreter import Interpreter, is_equal, is_truthy, run_source, stringify
from utopiascript.reporting import ErrorReporter


def run(source):
    """Run a program and return the diagnostics it reported."""
    messages = []
    run_source(source, reporter=ErrorReporter(sink=messages.append))
    return messages


def output_of(capsys, source):
    messages = run(source)
    assert messages == []
    return capsys.readouterr().out.splitlines()


def test_arithmetic(capsys):
    assert output_of(capsys, 'presi 3 + 4; presi 10 / 4; presi 2 * 3 - 1; presi -3; presi 1.5 + 1;') == [
        '7', '2.5', '5', '-3', '2.5',
    ]


def test_comparison(capsys):
    assert output_of(capsys, 'presi 1 < 2; presi 2 <= 2; presi 1 > 2; presi 3 >= 4;') == [
        'vera', 'vera', 'malvera', 'malvera',
    ]


def test_string_concatenation(capsys):
    assert output_of(capsys, 'presi "a" + "b"; presi "a" + 1; presi 1 + "a"; presi "n: " + vera; presi "x" + nenio;') == [
        'ab', 'a1', '1a', 'n: vera', 'xnenio',
    ]


def test_divide_by_zero_is_a_runtime_error(capsys):
    assert run('presi 1 / 0;') == ['Cannot divide by zero.\n[line 1]']
    assert capsys.readouterr().out == ''


def test_numeric_operands_required(capsys):
    assert run('presi "x" - 1;') == ['Operands must be numbers.\n[line 1]']
    assert run('presi 1 < "2";') == ['Operands must be numbers.\n[line 1]']
    assert run('presi -"x";') == ['Operand must be a number.\n[line 1]']


def test_plus_rejects_two_non_strings():
    assert run('presi vera + 1;') == ['Operands must be two numbers or two strings.\n[line 1]']
    assert run('presi nenio + nenio;') == ['Operands must be two numbers or two strings.\n[line 1]']


def test_equality(capsys):
    assert output_of(capsys, '''
        presi nenio == nenio;
        presi nenio == malvera;
        presi 1 == 1;
        presi "a" == "a";
        presi 1 == "1";
        presi vera == 1;
        presi 1 != 2;
        presi clock == clock;
    ''') == ['vera', 'malvera', 'vera', 'vera', 'malvera', 'malvera', 'vera', 'vera']


def test_truthiness(capsys):
    assert output_of(capsys, '''
        se (0) presi "0 vera"; alie presi "0 malvera";
        se ("") presi "malplena vera"; alie presi "malplena malvera";
        se (nenio) presi "nenio vera"; alie presi "nenio malvera";
        presi !nenio;
        presi !0;
        presi !malvera;
    ''') == ['0 vera', 'malplena vera', 'nenio malvera', 'vera', 'malvera', 'vera']


def test_or_does_not_evaluate_right_operand(capsys):
    assert output_of(capsys, 'presi vera au eksplodo();') == ['vera']


def test_and_does_not_evaluate_right_operand(capsys):
    assert output_of(capsys, 'presi malvera kaj eksplodo();') == ['malvera']


def test_right_operand_runs_when_not_short_circuited():
    assert run('presi malvera au eksplodo();') == ["Undefined variable 'eksplodo'.\n[line 1]"]


def test_logical_results(capsys):
    """aŭ short-circuits to vera itself; kaj short-circuits to its left operand."""
    assert output_of(capsys, '''
        presi 1 au 2;
        presi "x" au 2;
        presi malvera au "dekstra";
        presi nenio kaj 2;
        presi 1 kaj "dekstra";
    ''') == ['vera', 'vera', 'dekstra', 'nenio', 'dekstra']


def test_print_formatting(capsys):
    assert output_of(capsys, '''
        presi nenio;
        presi 2.0;
        presi 0.1;
        presi 100;
        presi clock;
        funkcio f() {}
        presi f;
    ''') == ['nenio', '2', '0.1', '100', '<native fn>', '<fn f>']


def test_uninitialized_variable_read_is_an_error():
    assert run('var a; presi a;') == [
        'Cannot access a variable that has not been initialized or assigned to\n[line 1]']


def test_variable_holding_nenio_reads_as_uninitialized():
    assert run('var a = 1;\na = nenio;\npresi a;') == [
        'Cannot access a variable that has not been initialized or assigned to\n[line 3]']


def test_undefined_variable_read_and_assignment():
    assert run('presi b;') == ["Undefined variable 'b'.\n[line 1]"]
    assert run('\nc = 1;') == ["Undefined variable 'c'.\n[line 2]"]


def test_assignment_is_an_expression(capsys):
    assert output_of(capsys, 'var a = 1; var b = 0; presi b = a = 5; presi a; presi b;') == ['5', '5', '5']


def test_redeclaration_in_same_scope_overwrites(capsys):
    assert output_of(capsys, 'var a = 1; var a = 2; presi a;') == ['2']


def test_block_shadowing(capsys):
    assert output_of(capsys, 'var a = 1; { var a = 2; presi a; } presi a;') == ['2', '1']


def test_block_assigns_outer_variable(capsys):
    assert output_of(capsys, 'var a = 1; { a = 2; } presi a;') == ['2']


def test_while_loop(capsys):
    assert output_of(capsys, 'var i = 0; dum (i < 3) { presi i; i = i + 1; } dum (malvera) presi "neniam";') == [
        '0', '1', '2']


def test_for_loop_variable_is_scoped_to_loop(capsys):
    messages = run('por (var i = 0; i < 2; i = i + 1) presi i;\npresi i;')
    assert capsys.readouterr().out.splitlines() == ['0', '1']
    assert messages == ["Undefined variable 'i'.\n[line 2]"]


def test_runtime_error_stops_remaining_statements(capsys):
    messages = run('presi "unu";\npresi -nenio;\npresi "tri";')
    assert capsys.readouterr().out.splitlines() == ['unu']
    assert messages == ['Operand must be a number.\n[line 2]']


def test_syntax_error_prevents_execution(capsys):
    messages = run('presi "unu";\npresi ;')
    assert capsys.readouterr().out == ''
    assert messages == ["[line 2] Error at ';': Expect expression."]


def test_environment_restored_after_runtime_error():
    reporter = ErrorReporter(sink=lambda message: None)
    interp = Interpreter(reporter=reporter)
    run_source('{ var a = 1; { presi a / 0; } }', interpreter=interp)
    assert reporter.had_runtime_error
    assert interp.environment is interp.globals
    assert 'a' not in interp.globals.values


def test_binary_operands_evaluated_right_to_left(capsys):
    assert output_of(capsys, '''
        var log = "";
        funkcio note(x) { log = log + x; revenigi x; }
        var r = note("a") + note("b");
        presi r;
        presi log;
    ''') == ['ab', 'ba']


def test_output_collaborator():
    lines = []
    interp = Interpreter(output=lines.append)
    run_source('presi 1; presi "du";', interpreter=interp)
    assert lines == ['1', 'du']


def test_helpers():
    assert is_truthy(0.0) and is_truthy('') and not is_truthy(None) and not is_truthy(False)
    assert is_equal(None, None) and not is_equal(None, False) and not is_equal(True, 1.0)
    assert stringify(-0.5) == '-0.5'
    assert stringify(3.0) == '3'
