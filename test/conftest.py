import pytest
import pathlib
import os

# default directory of the native ELP2000-82B files (ELP1 ... ELP36)
_default_directory = pathlib.Path(
    os.environ.get('PYELP2000_DATA', pathlib.Path.home() / '.pyELP2000')
)


def pytest_addoption(parser):
    parser.addoption("--directory", action="store", help="Directory of ELP2000-82B files", default=_default_directory, type=pathlib.Path)


@pytest.fixture(scope="session")
def directory(request):
    """ Returns Data Directory """
    return request.config.getoption("--directory")


@pytest.fixture(scope="session")
def elp_directory(directory):
    """ Data directory, skipping if the native files are absent """
    if not (directory / 'ELP1').exists() and not (directory / 'elp1').exists():
        pytest.skip(f"ELP2000-82B files not found in {directory}")
    return directory


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """ Run every test with default settings """
    import pyELP2000
    monkeypatch.delenv('PYELP2000_DIRECTORY', raising=False)
    monkeypatch.delenv('PYELP2000_TIER', raising=False)
    pyELP2000.reset_settings()
    yield
    pyELP2000.reset_settings()
