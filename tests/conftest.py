"""Shared fixtures for the formtree test suite."""

import pytest

from formtree import label, product
from sample_forms import Release, make_package_form, make_user_form


@pytest.fixture
def user_form():
    return make_user_form()


@pytest.fixture
def package_form():
    return make_package_form()


@pytest.fixture
def release_form(user_form, package_form):
    return product(label("author", user_form), label("package", package_form), Release)
