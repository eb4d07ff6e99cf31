import pytest


@pytest.fixture
def write_csv(tmp_path):
    """Write raw bytes to a .csv file under tmp_path and return its path."""

    def _write(raw: bytes, name: str = "data.csv"):
        path = tmp_path / name
        path.write_bytes(raw)
        return path

    return _write
