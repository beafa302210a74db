"""CLI Commands"""

import os

from cmsg.config import Config, API_KEY_ENV_VARS, get_config_path
from cmsg.output import bold, dim, info


def _mask(secret: str | None) -> str:
    if not secret:
        return 'not set'
    return f"{secret[:4]}…" if len(secret) > 8 else '***'


def display_config(config: Config) -> int:
    """Display current configuration."""
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .cmsgrc found)")

    env_provider = os.environ.get('CMSG_PROVIDER')
    env_model = os.environ.get('CMSG_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    CMSG_PROVIDER={env_provider}")
        if env_model:
            print(f"    CMSG_MODEL={env_model}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:         {info(config.provider)}")
    print(f"    model:            {info(config.model or 'default')}")
    print(f"    api_key:          {info(_mask(config.api_key))}")
    print(f"    ollama_host:      {info(config.ollama_host or 'default')}")
    print(f"    timeout:          {info(str(config.timeout))}")
    print(f"    max_file_display: {info(str(config.max_file_display))}")

    print(f"\n  {bold('Credentials:')}")
    for env_var in API_KEY_ENV_VARS.values():
        print(f"    {env_var}: {info(_mask(os.environ.get(env_var)))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .cmsgrc (in current directory)")
    print(f"    Global: ~/.cmsgrc\n")

    return 0
