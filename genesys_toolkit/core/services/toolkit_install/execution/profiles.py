"""
L4 Execution — Per-user shell profile edits for Archy.

Best-effort: appends a tagged comment line and a PATH export line to a
login profile file. A failure only means Archy is not on that shell's
PATH; it never fails the installation.

Appending does not deduplicate: running it twice leaves two blocks.
"""

from __future__ import annotations

import logging
from pathlib import Path

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.services.toolkit_install.execution.context import StepContext

logger = logging.getLogger(__name__)


def profile_block(ctx: StepContext) -> list[str]:
    """The lines appended to each profile, tag first."""
    return [ctx.config.profile_tag, ctx.config.profile_export]


def append_profile_path(ctx: StepContext, profile: Path, shell: str) -> Receipt:
    """Add Archy to ``PATH`` in one profile file.

    A profile created here is recorded as created, so rollback deletes
    the whole file; for a pre-existing profile only the appended lines
    are recorded. When the append fails on a file created here, the
    file is deleted right away.

    Args:
        ctx: Step context.
        profile: Profile file path (e.g. ``~/.zprofile``).
        shell: Shell label used in messages (e.g. ``Zsh``).

    Returns:
        Success receipt, or a skip receipt describing why the profile
        was left alone.
    """
    unavailable = (
        f'Archy will not be globally available to the user "{ctx.user}" '
        f"when using {shell}."
    )
    created = False

    if not profile.exists() and not profile.is_symlink():
        receipt = ctx.fs.touch(profile, owner=ctx.delegate_user)
        if receipt.failed:
            logger.warning('Could not create the "%s" file, %s', profile, unavailable)
            return Receipt.skip(source="archy", action="profile", reason=receipt.error or "")
        created = True
        ctx.ledger.mark_profile_created(profile)

    if not profile.is_file():
        logger.warning('"%s" is not a regular file, %s', profile, unavailable)
        return Receipt.skip(source="archy", action="profile", reason="not a regular file")

    lines = profile_block(ctx)
    receipt = ctx.fs.append_text(profile, "".join(f"{line}\n" for line in lines))
    if receipt.failed:
        logger.warning(
            'Could not add Archy to the PATH environment variable in "%s", %s',
            profile, unavailable,
        )
        if created:
            ctx.fs.remove_file(profile)
        return Receipt.skip(source="archy", action="profile", reason=receipt.error or "")

    if not created:
        ctx.ledger.record_profile_lines(
            profile, lines, newline_added=bool(receipt.metadata.get("newline_added")),
        )

    logger.info(
        'Successfully added Archy to the PATH environment variable in "%s", '
        'Archy will be globally available to the user "%s" when using %s.',
        profile, ctx.user, shell,
    )
    return Receipt.success(
        source="archy",
        action="profile",
        metadata={"path": str(profile), "created": created},
    )
