import pytest

from coff_sections.types import (
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_CNT_INITIALIZED_DATA,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SCN_MEM_READ,
    IMAGE_SCN_MEM_WRITE,
)
from coff_test_utils import make_object_file


TEXT_FLAGS = IMAGE_SCN_CNT_CODE | IMAGE_SCN_MEM_EXECUTE | IMAGE_SCN_MEM_READ
DATA_FLAGS = IMAGE_SCN_CNT_INITIALIZED_DATA | IMAGE_SCN_MEM_READ | IMAGE_SCN_MEM_WRITE


@pytest.fixture
def object_file_bytes() -> bytes:
    """Object file with one inline name and two long names.

    String table layout:
        4:  ".debug_info"
        16: ".debug_abbrev"
    """
    return make_object_file(
        [
            (b".text", TEXT_FLAGS),
            (b"/4", DATA_FLAGS),
            (b"//AAAAAQ", DATA_FLAGS),  # "Q" = 16
        ],
        [".debug_info", ".debug_abbrev"],
        number_of_symbols=2,
    )
