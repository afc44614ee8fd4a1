import pytest

from glisp.builtin.env_builtin import builtin_environment
from glisp.evaluation.evaluator import evaluate_all
from glisp.reader.parser import parse


@pytest.fixture
def env():
    """Fresh script frame under the shared built-in frame."""
    return builtin_environment().sub_environment()


@pytest.fixture
def run(env):
    """Parse and evaluate source in `env`, returning the last value."""
    def _run(source: str):
        return evaluate_all(parse(source), env)
    return _run
