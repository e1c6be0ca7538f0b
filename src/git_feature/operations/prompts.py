"""Interactive prompts used by git-feature commands."""

import click

from git_feature.errors import InputError


class Prompter:
    """Blocking user interaction needed by the release workflow."""

    def select_one(self, message: str, options: list[str]) -> str:
        raise NotImplementedError

    def confirm(self, message: str) -> bool:
        raise NotImplementedError

    def text_input(self, message: str, default: str) -> str:
        raise NotImplementedError


class ClickPrompter(Prompter):
    """Prompter reading from the terminal through click."""

    def select_one(self, message: str, options: list[str]) -> str:
        if not options:
            raise InputError("Nothing to choose from")

        for index, option in enumerate(options, start=1):
            click.echo(f"  {index}) {option}")

        answer = click.prompt(
            message,
            type=click.Choice(options + [str(i) for i in range(1, len(options) + 1)]),
            show_choices=False,
            default=options[0],
        )
        if answer in options:
            return answer
        return options[int(answer) - 1]

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=True)

    def text_input(self, message: str, default: str) -> str:
        value = click.prompt(message, default=default, show_default=True)
        return value.strip() or default
