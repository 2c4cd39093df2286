# Binary download actions

import json
import logging
from typing import Optional

from devsetup.engine.context import SetupContext
from devsetup.engine.schema import ActionOutcome
from devsetup.utils.shell import CommandLog

logger = logging.getLogger(__name__)

INSTALL_DIR = '/usr/local/bin'


def _prepare(ctx: SetupContext, runner) -> CommandLog:
    log = CommandLog(runner)
    log.run(['mkdir', '-p', str(ctx.work_dir)], check=True)
    return log


def _download(log: CommandLog, url: str, destination: str) -> bool:
    return log.succeeded(log.run(['curl', '-fsSL', '-o', destination, url], check=True))


def _install_binary(ctx: SetupContext, log: CommandLog, source: str, name: str) -> None:
    log.run(ctx.as_root(['install', '-o', 'root', '-g', 'root', '-m', '0755', source, f"{INSTALL_DIR}/{name}"]),
            check=True)
    log.run(['rm', '-f', source])


def install_kubectl(ctx: SetupContext, runner, release_url: str, download_url: str,
                    arch: str = 'amd64', version: Optional[str] = None) -> ActionOutcome:
    """Install the latest stable kubectl and create ~/.kube for the target user."""
    log = _prepare(ctx, runner)

    if not version:
        result = log.run(['curl', '-fsSL', release_url], check=True)
        version = (result.get('stdout') or '').strip()
        if not version:
            log.fail(f"Could not determine kubectl version from {release_url}")
            return log.outcome()

    binary = str(ctx.work_dir / 'kubectl')
    if _download(log, download_url.format(version=version, arch=arch), binary):
        _install_binary(ctx, log, binary, 'kubectl')

    log.run(ctx.as_user(['mkdir', '-p', str(ctx.kube_dir)]))
    return log.outcome()


def install_helm(ctx: SetupContext, runner, script_url: str) -> ActionOutcome:
    """Install Helm 3 with the upstream installer script."""
    log = _prepare(ctx, runner)
    script = str(ctx.work_dir / 'get_helm.sh')
    if _download(log, script_url, script):
        log.run(['chmod', '700', script])
        log.run(ctx.as_root(['bash', script]), cwd=str(ctx.work_dir), check=True)
        log.run(['rm', '-f', script])
    return log.outcome()


def install_lazygit(ctx: SetupContext, runner, release_api: str, download_url: str,
                    version: Optional[str] = None) -> ActionOutcome:
    """Install the latest Lazygit release from GitHub."""
    log = _prepare(ctx, runner)

    if not version:
        result = log.run(['curl', '-fsSL', release_api], check=True)
        try:
            version = json.loads(result.get('stdout') or '{}').get('tag_name', '').lstrip('v')
        except ValueError:
            version = ''
        if not version:
            log.fail(f"Could not determine Lazygit version from {release_api}")
            return log.outcome()

    archive = str(ctx.work_dir / 'lazygit.tar.gz')
    if _download(log, download_url.format(version=version), archive):
        log.run(['tar', 'xf', archive, '-C', str(ctx.work_dir), 'lazygit'], check=True)
        _install_binary(ctx, log, str(ctx.work_dir / 'lazygit'), 'lazygit')
        log.run(['rm', '-f', archive])
    return log.outcome()


def install_aws_cli(ctx: SetupContext, runner, download_url: str) -> ActionOutcome:
    """Install or update AWS CLI v2."""
    log = _prepare(ctx, runner)
    archive = str(ctx.work_dir / 'awscliv2.zip')
    if _download(log, download_url, archive):
        log.run(['unzip', '-o', '-q', archive, '-d', str(ctx.work_dir)], check=True)
        # --update makes the installer safe to run over an existing install
        log.run(ctx.as_root([str(ctx.work_dir / 'aws' / 'install'), '--update']), check=True)
        log.run(['rm', '-rf', archive, str(ctx.work_dir / 'aws')])
    return log.outcome()


def install_eksctl(ctx: SetupContext, runner, download_url: str, arch: str = 'amd64') -> ActionOutcome:
    """Install the latest eksctl release."""
    log = _prepare(ctx, runner)

    system = (log.run(['uname', '-s']).get('stdout') or 'Linux').strip()
    platform = f"{system}_{arch}"
    archive = str(ctx.work_dir / f"eksctl_{platform}.tar.gz")

    if _download(log, download_url.format(platform=platform), archive):
        log.run(['tar', '-xzf', archive, '-C', str(ctx.work_dir)], check=True)
        _install_binary(ctx, log, str(ctx.work_dir / 'eksctl'), 'eksctl')
        log.run(['rm', '-f', archive])
    return log.outcome()
