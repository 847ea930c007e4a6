import pytest

from sjx_sass.config.model import CompileOptions

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.compiler_utils import EchoCompiler, SpacingCompiler


@pytest.fixture
def echo_compiler():
    """Компилятор, возвращающий подготовленный исходник без изменений."""
    return EchoCompiler()


@pytest.fixture
def spacing_compiler():
    """Компилятор, вставляющий пробелы между токеном и единицей/процентом."""
    return SpacingCompiler()


@pytest.fixture
def opts():
    return CompileOptions()


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    # отладочный вывод CLI не должен попадать в stderr тестов
    monkeypatch.delenv("SJX_SASS_DEBUG", raising=False)
