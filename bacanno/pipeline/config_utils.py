"""Loads configurations from .yaml files and expands environment variables.
"""
import os

import yaml

from bacanno import utils

DEFAULT_CONFIG = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                              "config", "bacanno_system.yaml")

def load_system_config(config_file=None):
    """Load the default system configuration, merging in a user supplied file.

    Returns the configuration and the file it was loaded from.
    """
    config = load_config(DEFAULT_CONFIG)
    if config_file:
        if not os.path.exists(config_file):
            raise ValueError("Could not find input system configuration file %s" % config_file)
        config = utils.deep_merge(config, load_config(config_file))
    config["bacanno_system"] = config_file or DEFAULT_CONFIG
    return config, config["bacanno_system"]

def load_config(config_file):
    """Load YAML config file, replacing environmental variables.
    """
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle) or {}
    config = _expand_paths(config)
    if "resources" not in config:
        config["resources"] = {}
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(config[field], dict):
            config[field] = _expand_paths(config[field])
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """ Combines os.path.expandvars with replacing ~ with $HOME.
    """
    try:
        return os.path.expandvars(path.replace("~", "$HOME"))
    except AttributeError:
        return path
