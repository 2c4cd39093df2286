# Docker actions

import logging
from typing import List, Optional

from devsetup.engine.context import SetupContext
from devsetup.engine.schema import ActionOutcome
from devsetup.steps.apt.actions import apt_get, configure_repository, install_each
from devsetup.utils.shell import CommandLog

logger = logging.getLogger(__name__)


def install(ctx: SetupContext, runner, key_url: str, source: str, packages: List[str],
            prerequisites: Optional[List[str]] = None, group: str = 'docker') -> ActionOutcome:
    """Install Docker Engine from Docker's apt repository and grant the target user access."""
    log = CommandLog(runner)

    log.run(apt_get(ctx, 'update', '-y'))
    install_each(ctx, log, prerequisites or [])

    if not configure_repository(ctx, log, 'docker', key_url, source, keyring=None, dearmor=False, arch=None):
        return log.outcome()

    log.run(apt_get(ctx, 'update', '-y'))
    install_each(ctx, log, packages)

    # groupadd complains when the group already exists
    log.run(ctx.as_root(['groupadd', group]), keep_stderr=False)
    log.run(ctx.as_root(['usermod', '-aG', group, ctx.target_user]), check=True)
    logger.info("Added %s to the %s group", ctx.target_user, group)
    return log.outcome()
