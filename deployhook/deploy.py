"""Per-tenant deployment trigger.

Each tenant ships an executable entry point at ``<home_root>/<tenant>/<script>``.
It is run through ``sudo -u <tenant>`` from the tenant's home directory so
tenant code never runs as the service user. The command is passed as an
argument vector, so the tenant id is a single argument and never reaches a shell.
"""

import logging
import re
import subprocess
from pathlib import Path

from deployhook.models import DeploymentError, DeploymentOutcome

TENANT_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class DeploymentTrigger:
    def __init__(
        self,
        home_root: Path,
        script_name: str,
        logger: logging.Logger,
        sudo_path: str = "sudo",
    ):
        self.home_root = Path(home_root)
        self.script_name = script_name
        self.sudo_path = sudo_path
        self.logger = logger

    def home_dir(self, tenant: str) -> Path:
        return self.home_root / tenant

    def entry_point(self, tenant: str) -> Path:
        return self.home_dir(tenant) / self.script_name

    def command(self, tenant: str) -> list[str]:
        # -n: fail instead of prompting for a password; "--" ends sudo's own options
        return [self.sudo_path, "-n", "-u", tenant, "--", str(self.entry_point(tenant))]

    def trigger(self, tenant: str) -> DeploymentOutcome:
        """Run the tenant's deploy entry point and capture its combined output."""
        if not TENANT_PATTERN.fullmatch(tenant):
            self.logger.error(f"Refusing to deploy for invalid app name: {tenant!r}")
            return DeploymentOutcome(success=False, error=DeploymentError.SCRIPT_NOT_FOUND)

        script = self.entry_point(tenant)
        if not script.is_file():
            self.logger.error(f"Deploy script not found: {script}")
            return DeploymentOutcome(success=False, error=DeploymentError.SCRIPT_NOT_FOUND)

        try:
            result = subprocess.run(
                self.command(tenant),
                cwd=self.home_dir(tenant),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            self.logger.error(f"Deployment could not start for {tenant}: {e}")
            return DeploymentOutcome(
                success=False, output=str(e), error=DeploymentError.DEPLOYMENT_FAILED
            )

        output = (result.stdout or "").rstrip("\n")
        if result.returncode == 0:
            self.logger.info(f"Deployment successful for {tenant}")
            return DeploymentOutcome(success=True, output=output, exit_code=0)

        self.logger.error(f"Deployment failed for {tenant} (exit {result.returncode}): {output}")
        return DeploymentOutcome(
            success=False,
            output=output,
            error=DeploymentError.DEPLOYMENT_FAILED,
            exit_code=result.returncode,
        )


def run_deployment(trigger: DeploymentTrigger, tenant: str, logger: logging.Logger) -> DeploymentOutcome | None:
    """Background phase of a push: runs after the HTTP response has been sent."""
    try:
        outcome = trigger.trigger(tenant)
    except Exception:
        logger.exception(f"Deployment crashed for {tenant}")
        return None

    if outcome.success:
        logger.info(f"Deployment completed for {tenant}")
    else:
        error = outcome.error.value if outcome.error else "unknown"
        logger.error(f"Deployment failed for {tenant}: {error}")
    return outcome
