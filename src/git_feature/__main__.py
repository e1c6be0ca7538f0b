from git_feature.cli import cli

cli(prog_name="git-feature")
