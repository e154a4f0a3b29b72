"""Tree-walking interpreter for UtopiaScript.

The interpreter executes statements and evaluates expressions directly
on the AST. It keeps a pointer to the current environment; blocks and
function calls swap in a child frame and always put the previous one
back when they finish, whether they complete, return or fail.

A ``revenigi`` statement does not raise. Statement execution returns
``None`` when it completes normally and a :class:`ReturnSignal` when a
return is in flight; blocks and loops pass the signal up until the
enclosing function call turns it into the call's value.

Runtime errors are raised as :class:`UtopiaRuntimeError` and reported
once, at the top level, by :meth:`Interpreter.interpret`.
"""

from __future__ import annotations

from collections import deque
from dataclasses import fields, is_dataclass
from typing import Any, Callable as PyCallable, List, Optional, Sequence, Union
import pathlib

from .ast import (
    Assign, BinaryOp, Block, Call, Expr, ExprStmt, FuncDecl, Grouping,
    IfStmt, Literal, Logical, PrintStmt, Program, ReturnStmt, Stmt,
    UnaryOp, Variable, VarDecl, WhileStmt,
)
from .builtin_function import populate_globals
from .callables import Callable, UserFunction
from .environment import Environment
from .errors import ReturnSignal, UtopiaRuntimeError
from .parser import Parser
from .reporting import ErrorReporter
from .scanner import scan
from .tokens import Token, TokenType


def is_truthy(value: Any) -> bool:
    # Only nenio and malvera are false; 0 and "" are true.
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # Python treats True == 1.0; UtopiaScript booleans never equal numbers.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def stringify(value: Any) -> str:
    """Convert a UtopiaScript value to the text `presi` writes."""
    if value is None:
        return 'nenio'
    if value is True:
        return 'vera'
    if value is False:
        return 'malvera'
    if isinstance(value, float):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    if isinstance(value, str):
        return value
    return repr(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, float)


def nearest_token(node: Any) -> Token:
    """Return the shallowest token inside ``node`` for locating an error.

    The walk is breadth-first and iterative, so it works on trees too
    deep to evaluate.
    """
    queue = deque([node])
    while queue:
        current = queue.popleft()
        if isinstance(current, Token):
            return current
        if isinstance(current, (tuple, list)):
            queue.extend(current)
        elif is_dataclass(current):
            queue.extend(getattr(current, f.name) for f in fields(current))
    return Token(TokenType.EOF, '', None, 1, 0)


class Interpreter:
    """Core interpreter that executes UtopiaScript ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 output: Optional[PyCallable[[str], None]] = None,
                 reporter: Optional[ErrorReporter] = None):
        self.globals = Environment()
        self.environment = self.globals
        self.output = output if output is not None else print
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        populate_globals(self.globals)

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: Union[Program, Sequence[Stmt]]) -> bool:
        """Run a program; return False if it stopped on a runtime error."""
        if isinstance(statements, Program):
            statements = statements.body
        stmt = None
        try:
            for stmt in statements:
                if self.debug_level >= 1:
                    self.debug(f"execute {type(stmt).__name__}")
                if isinstance(self.execute(stmt), ReturnSignal):
                    # only reachable from ASTs built outside the parser
                    break
        except UtopiaRuntimeError as error:
            self.report_runtime_error(error)
            return False
        except RecursionError:
            # deep expressions outside any call; calls report their own overflow
            self.report_runtime_error(UtopiaRuntimeError(nearest_token(stmt), 'Stack overflow.'))
            return False
        return True

    def report_runtime_error(self, error: UtopiaRuntimeError) -> None:
        self.debug(f"runtime error: {error.message} [line {error.token.line}]")
        self.reporter.runtime_error(error)

    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> Optional[ReturnSignal]:
        previous = self.environment
        try:
            self.environment = env
            for stmt in statements:
                result = self.execute(stmt)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        finally:
            self.environment = previous

    def execute(self, node: Stmt) -> Optional[ReturnSignal]:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr)
            return None
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            self.output(stringify(value))
            return None
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer) if node.initializer is not None else None
            self.environment.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme} = {stringify(value)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(parent=self.environment))
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch)
            if node.else_branch is not None:
                return self.execute(node.else_branch)
            return None
        if isinstance(node, WhileStmt):
            while is_truthy(self.evaluate(node.condition)):
                result = self.execute(node.body)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        if isinstance(node, FuncDecl):
            function = UserFunction(node, self.environment)
            self.environment.define(node.name.lexeme, function)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return None
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value) if node.value is not None else None
            return ReturnSignal(value)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            value = self.environment.get(node.name)
            if value is None:
                # nenio and "declared without initializer" are indistinguishable here
                raise UtopiaRuntimeError(
                    node.name, 'Cannot access a variable that has not been initialized or assigned to')
            return value
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            if self.debug_level >= 3:
                self.debug(f"assign {node.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            if node.operator.type == TokenType.MINUS:
                if not _is_number(operand):
                    raise UtopiaRuntimeError(node.operator, 'Operand must be a number.')
                return -operand
            if node.operator.type == TokenType.BANG:
                return not is_truthy(operand)
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return True
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, BinaryOp):
            right = self.evaluate(node.right)
            left = self.evaluate(node.left)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            if not isinstance(callee, Callable):
                raise UtopiaRuntimeError(node.paren, 'Can only call functions and classes')
            args = [self.evaluate(arg) for arg in node.args]
            return self.call_function(callee, args, node.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Callable, args: List[Any], paren: Token) -> Any:
        if len(args) != func.arity():
            raise UtopiaRuntimeError(paren, f"Expected {func.arity()} arguments but got {len(args)}.")
        if self.debug_level >= 2:
            self.debug(f"call {func!r} with {len(args)} arguments")
        try:
            return func.invoke(self, args)
        except RecursionError:
            raise UtopiaRuntimeError(paren, 'Stack overflow.') from None

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.PLUS:
            if _is_number(a) and _is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            if isinstance(a, str):
                return a + stringify(b)
            if isinstance(b, str):
                return stringify(a) + b
            raise UtopiaRuntimeError(operator, 'Operands must be two numbers or two strings.')
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        if not (_is_number(a) and _is_number(b)):
            raise UtopiaRuntimeError(operator, 'Operands must be numbers.')
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            if b == 0.0:
                raise UtopiaRuntimeError(operator, 'Cannot divide by zero.')
            return a / b
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise NotImplementedError(f"unknown operator {operator.lexeme}")


def run_source(source: str, reporter: Optional[ErrorReporter] = None,
               interpreter: Optional[Interpreter] = None, **kwargs) -> Interpreter:
    """Scan, parse and run a UtopiaScript program from a source string.

    Nothing runs if scanning or parsing reported an error. The
    interpreter is returned so callers can inspect its globals.
    """
    if reporter is None:
        reporter = interpreter.reporter if interpreter is not None else ErrorReporter()
    if interpreter is None:
        interpreter = Interpreter(reporter=reporter, **kwargs)
    tokens = scan(source, reporter)
    statements = Parser(tokens, reporter).parse()
    if reporter.had_error:
        return interpreter
    interpreter.interpret(statements)
    return interpreter


def run_file(file_path: Union[str, pathlib.Path], **kwargs) -> Interpreter:
    """Run a UtopiaScript file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_source(source, **kwargs)
