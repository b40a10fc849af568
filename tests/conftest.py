import pytest

from qrsymbol import encode_text
from qrsymbol.functional_areas import build_function_template


@pytest.fixture()
def hello_world():
    """HELLO WORLD at version 1-Q, the common worked example."""
    return encode_text("HELLO WORLD", "Q")


@pytest.fixture()
def template_v7():
    """Unmasked version 7 grid with only the function patterns drawn."""
    return build_function_template(7)
