"""
seisresp's testing configuration file.
"""
import os
import shutil
from pathlib import Path

import numpy as np
import pytest

import seisresp


SEISRESP_PATH = os.path.dirname(seisresp.__file__)


# --- seisresp fixtures


@pytest.fixture(scope='class')
def ignore_numpy_errors():
    """
    Ignore numpy errors for marked tests.
    """
    nperr = np.geterr()
    np.seterr(all='ignore')
    yield
    np.seterr(**nperr)


@pytest.fixture(scope='session', autouse=True)
def save_image_directory(request, tmp_path_factory):
    """
    Creates a temporary directory for storing all images.
    """
    tmp_image_path = tmp_path_factory.mktemp('images')
    yield Path(tmp_image_path)
    # if keep images is selected then we move images to directory
    if request.config.getoption('--keep-images', default=False):
        new_path = Path(SEISRESP_PATH) / 'seisresp_test_images'
        if new_path.exists():
            shutil.rmtree(new_path)
        shutil.copytree(tmp_image_path, new_path)


@pytest.fixture(scope='function')
def image_path(request, save_image_directory):
    """
    Returns a path for saving an image.

    These will be saved to seisresp_test_images if --keep-images is
    selected. Using this fixture will also mark a test with "image".
    """
    parent_obj = getattr(request.node.parent, 'obj', None)
    node_name = request.node.name
    if parent_obj is not None and hasattr(parent_obj, '__name__'):
        node_name = parent_obj.__name__ + '_' + node_name
    new_path = save_image_directory / (node_name + '.png')
    yield new_path
    # finally close all figs created by this test
    from matplotlib.pyplot import close
    close('all')


# --- Pytest configuration


def pytest_addoption(parser):
    """Pytest hook which allows setting package-specific command-line args."""
    parser.addoption('--keep-images', action='store_true',
                     help='store images created while runing test suite '
                          'in a directory called seisresp_test_images.')


def pytest_collection_modifyitems(config, items):
    """ Preprocessor for collected tests. """
    for item in items:
        # automatically apply image mark to tests using image_path fixture.
        if 'image_path' in getattr(item, 'fixturenames', {}):
            item.add_marker('image')


def pytest_configure(config):
    """
    Configure pytest with custom logic for seisresp before test run.
    """
    config.addinivalue_line(
        'markers', 'image: test creates an image with matplotlib')

    # Set numpy print options to try to not break doctests.
    try:
        np.set_printoptions(legacy='1.13')
    except (TypeError, AttributeError):
        pass

    # Ensure matplotlib doesn't try to show anything.
    import matplotlib
    matplotlib.use('Agg')
