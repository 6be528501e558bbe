"""
Thin wrapper around the ``sui`` CLI for building Move packages and keeping
their manifests in sync with published addresses.
"""
import json
import logging
import re
import subprocess
from pathlib import Path
from typing import Optional

import yaml

from . import config

_LOGGER = logging.getLogger(__name__)


class SuiCli:
    def __init__(
        self,
        config_path: Optional[Path] = None,
        packages_dir: Optional[Path] = None,
        rpc_url: Optional[str] = None,
    ):
        self.config_path = Path(config_path or config.SUI_CLIENT_CONFIG)
        self.packages_dir = Path(packages_dir or config.MOVE_PACKAGES_DIR)
        if rpc_url:
            self.switch_env(rpc_url)

    def env_alias(self, rpc_url: str) -> str:
        with self.config_path.open() as f:
            client_config = yaml.safe_load(f)
        for env in client_config.get("envs", []):
            if env.get("rpc") == rpc_url:
                return env["alias"]
        raise ValueError(
            f"Could not find configured env with RPC {rpc_url}. Check config at {self.config_path}"
        )

    def switch_env(self, rpc_url: str):
        alias = self.env_alias(rpc_url)
        subprocess.run(
            [
                "sui",
                "client",
                "--client.config",
                str(self.config_path),
                "switch",
                "--env",
                alias,
            ],
            check=True,
            capture_output=True,
        )

    def package_path(self, package_name: str) -> Path:
        return self.packages_dir / package_name

    def build_package(
        self, package_name: str, with_unpublished_dependencies: bool = False
    ) -> dict:
        """Compile a package, returning its base64 modules, dependencies and digest."""
        command = [
            "sui",
            "move",
            "--client.config",
            str(self.config_path),
            "build",
            "--dump-bytecode-as-base64",
            "--path",
            str(self.package_path(package_name)),
        ]
        if with_unpublished_dependencies:
            command.append("--with-unpublished-dependencies")
        result = subprocess.run(
            command, check=True, capture_output=True, text=True
        )
        return json.loads(result.stdout)

    def manifest_path(self, package_name: str) -> Path:
        return self.package_path(package_name) / "Move.toml"

    def write_published_address(self, package_name: str, address: str):
        path = self.manifest_path(package_name)
        content = path.read_text()
        content = content.replace("[package]", f'[package]\npublished-at = "{address}"', 1)
        content = content.replace(f'{package_name} = "0x0"', f'{package_name} = "{address}"')
        path.write_text(content)
        _LOGGER.info(f"Wrote published address {address} to {path}")
        # refreshes Move.lock
        self.build_package(package_name)

    def reset_published_address(self, package_name: str):
        path = self.manifest_path(package_name)
        content = path.read_text()
        content = re.sub(r"\npublished-at.*\w{66}.*", "", content)
        content = re.sub(
            rf"\n{re.escape(package_name)}.*\w{{66}}.*",
            f'\n{package_name} = "0x0"',
            content,
        )
        path.write_text(content)
        self.build_package(package_name)
