"""Custom Click base classes with --examples support.

VidCommand and VidGroup accept an ``examples`` string. Passing
``--examples`` prints it and exits, keeping ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when examples are supplied."""

    params: list[click.Parameter]
    examples: str | None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show_examples,
                help="Show usage examples.",
            )
        )


class VidCommand(_ExamplesMixin, click.Command):
    """Click Command that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class VidGroup(_ExamplesMixin, click.Group):
    """Click Group that supports an ``--examples`` flag.

    Subcommands default to :class:`VidCommand`, so ``examples=`` works
    without ``cls=`` on each one.
    """

    command_class = VidCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
