import logging

import click
import pytest
from pytest_check import check

from git_feature.commands._shared import handle_errors
from git_feature.errors import (
    BranchExistsError,
    DuplicateFeatureError,
    FeatureError,
    FeatureNotFoundError,
    GatewayError,
    GitConflictError,
    InputError,
    PublishError,
    ReleaseAbortedError,
    StateReadError,
)
from git_feature.log import configure_logging, logger


def test_exit_codes():
    check.equal(FeatureError.exit_code, 1)
    check.equal(InputError.exit_code, 1)
    check.equal(GatewayError.exit_code, 4)
    check.equal(BranchExistsError.exit_code, 4)
    check.equal(GitConflictError.exit_code, 3)
    check.equal(ReleaseAbortedError.exit_code, 3)
    check.equal(PublishError.exit_code, 5)


def test_hierarchy():
    check.is_true(issubclass(DuplicateFeatureError, InputError))
    check.is_true(issubclass(FeatureNotFoundError, InputError))
    check.is_true(issubclass(BranchExistsError, GatewayError))
    check.is_false(issubclass(GitConflictError, GatewayError))
    check.is_true(issubclass(StateReadError, FeatureError))


def test_handle_errors_keeps_exit_code():
    @handle_errors
    def fail() -> None:
        raise PublishError("boom", status_code=500)

    with pytest.raises(click.ClickException) as excinfo:
        fail()

    check.equal(excinfo.value.exit_code, 5)
    check.equal(excinfo.value.message, "boom")


def test_configure_logging_levels():
    configure_logging(verbose=True)
    check.equal(logger.level, logging.DEBUG)

    configure_logging(verbose=False)
    check.equal(logger.level, logging.WARNING)
    check.equal(len(logger.handlers), 1)
