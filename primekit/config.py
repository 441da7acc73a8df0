"""
Run configuration.

Defaults live here; a YAML file (config/default.yaml) may override any
of them. Unknown keys are rejected so typos do not pass silently.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import InvalidArgument

DEFAULTS: Dict[str, Any] = {
    'limits': [100, 1000, 10000],
    'sieves': ['atkin', 'eratosthenes', 'sundaram'],
    'workers': None,            # None = CPU count
    'miller_rabin_trials': 64,
    'seed': 42,
    'verbose': True,
}


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load run configuration.

    Parameters
    ----------
    path : str or Path, optional
        YAML file to overlay on DEFAULTS. None returns a copy of DEFAULTS.

    Returns
    -------
    dict
        Merged configuration.

    Raises
    ------
    InvalidArgument
        If the file holds unknown keys, is not a mapping, or has invalid values.
    """
    config = dict(DEFAULTS)
    if path is None:
        return config

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise InvalidArgument(f"{path}: expected a mapping, got {type(loaded).__name__}")

    unknown = sorted(set(loaded) - set(DEFAULTS))
    if unknown:
        raise InvalidArgument(f"{path}: unknown config keys {unknown}")

    config.update(loaded)

    if any(limit < 0 for limit in config['limits']):
        raise InvalidArgument(f"{path}: limits must be non-negative")
    bad_sieves = sorted(set(config['sieves']) - set(DEFAULTS['sieves']))
    if bad_sieves:
        raise InvalidArgument(f"{path}: unknown sieves {bad_sieves}")
    if config['workers'] is not None and config['workers'] < 1:
        raise InvalidArgument(f"{path}: workers must be >= 1")

    return config
