"""Tests for feature registry commands."""

import json
from shlex import split

import pytest
from pytest_check import check

from git_feature.cli import cli
from git_feature.operations import JsonStateStore


@pytest.fixture
def state_dir(tmp_path):
    return tmp_path / "state"


def invoke(runner, state_dir, args, **kwargs):
    return runner.invoke(cli, ["--state-dir", str(state_dir), *split(args)], **kwargs)


class TestAddFeature:
    def test_add_feature(self, runner, state_dir):
        result = invoke(runner, state_dir, "add-feature login-page")

        check.equal(result.exit_code, 0)
        check.is_in('Feature "login-page" added successfully.', result.output)
        check.equal(
            json.loads((state_dir / "features.json").read_text()),
            {"features": ["login-page"]},
        )

    def test_add_feature_appends(self, runner, state_dir):
        invoke(runner, state_dir, "add-feature login-page")
        invoke(runner, state_dir, "add-feature checkout")

        assert JsonStateStore(state_dir).load_features() == ["login-page", "checkout"]

    def test_add_duplicate_feature(self, runner, state_dir):
        invoke(runner, state_dir, "add-feature login-page")
        result = invoke(runner, state_dir, "add-feature login-page")

        check.equal(result.exit_code, 1)
        check.is_in("already exists", result.output)
        check.equal(JsonStateStore(state_dir).load_features(), ["login-page"])

    def test_add_feature_requires_name(self, runner, state_dir):
        result = invoke(runner, state_dir, "add-feature")
        assert result.exit_code == 2

    def test_add_numeric_feature_rejected(self, runner, state_dir):
        result = invoke(runner, state_dir, "add-feature 2")

        check.equal(result.exit_code, 1)
        check.is_in("only digits", result.output)
        check.equal(JsonStateStore(state_dir).load_features(), [])


class TestRemoveFeature:
    def test_remove_named_feature(self, runner, state_dir):
        JsonStateStore(state_dir).save_features(["a", "b", "c"])

        result = invoke(runner, state_dir, "remove-feature b")

        check.equal(result.exit_code, 0)
        check.is_in('Feature "b" removed successfully.', result.output)
        check.equal(JsonStateStore(state_dir).load_features(), ["a", "c"])

    def test_remove_feature_interactively(self, runner, state_dir):
        JsonStateStore(state_dir).save_features(["a", "b", "c"])

        result = invoke(runner, state_dir, "remove-feature", input="2\n")

        check.equal(result.exit_code, 0)
        check.is_in("2) b", result.output)
        check.equal(JsonStateStore(state_dir).load_features(), ["a", "c"])

    def test_remove_feature_by_name_at_prompt(self, runner, state_dir):
        JsonStateStore(state_dir).save_features(["a", "b"])

        result = invoke(runner, state_dir, "remove-feature", input="a\n")

        check.equal(result.exit_code, 0)
        check.equal(JsonStateStore(state_dir).load_features(), ["b"])

    def test_remove_when_empty(self, runner, state_dir):
        result = invoke(runner, state_dir, "remove-feature")

        check.equal(result.exit_code, 0)
        check.is_in("No features available to remove.", result.output)

    def test_remove_unknown_feature(self, runner, state_dir):
        JsonStateStore(state_dir).save_features(["a"])

        result = invoke(runner, state_dir, "remove-feature b")

        check.equal(result.exit_code, 1)
        check.is_in('Feature "b" does not exist', result.output)


def test_list_features(runner, state_dir):
    store = JsonStateStore(state_dir)
    store.save_features(["login-page", "checkout"])
    store.save_commit_log({"login-page": ["a1b2", "c3d4"], "checkout": ["e5f6"]})

    result = invoke(runner, state_dir, "features")

    check.equal(result.exit_code, 0)
    check.is_in("login-page (2 commits)", result.output)
    check.is_in("checkout (1 commit)", result.output)


def test_list_features_empty(runner, state_dir):
    result = invoke(runner, state_dir, "features")
    assert "No features registered." in result.output


def test_init(runner, state_dir):
    result = invoke(runner, state_dir, "init")

    check.equal(result.exit_code, 0)
    check.is_in("commit-log.json", result.output)
    check.is_in("features.json", result.output)
    check.equal(json.loads((state_dir / "features.json").read_text()), {"features": []})
    check.equal(json.loads((state_dir / "commit-log.json").read_text()), {})


def test_init_twice(runner, state_dir):
    invoke(runner, state_dir, "init")
    result = invoke(runner, state_dir, "init")

    assert "already initialized" in result.output


def test_pwd(runner, state_dir):
    result = invoke(runner, state_dir, "pwd")

    check.equal(result.exit_code, 0)
    check.equal(result.output.strip(), str(state_dir))


def test_pwd_from_environment(runner, tmp_path):
    result = runner.invoke(cli, ["pwd"], env={"GIT_FEATURE_STATE_DIR": str(tmp_path)})
    assert result.output.strip() == str(tmp_path)
