# Desktop actions

from devsetup.engine.context import SetupContext
from devsetup.engine.schema import ActionOutcome
from devsetup.utils.shell import CommandLog


def set_gsetting(ctx: SetupContext, runner, schema: str, key: str, value: str) -> ActionOutcome:
    """Set a GNOME setting for the target user (e.g., the input source switch keys)."""
    log = CommandLog(runner)
    log.run(ctx.as_user(['gsettings', 'set', schema, key, value]), check=True)
    return log.outcome()
