"""
functions to access the system configuration dictionary in a clearer way
"""
import toolz as tz

LOOKUPS = {
    "conda_cmd": {"keys": ["conda", "cmd"], "default": "conda"},
    "conda_channels": {"keys": ["conda", "channels"], "default": ["bioconda", "conda-forge"],
                       "always_list": True},
    "environments": {"keys": ["environments"], "default": {}},
    "references": {"keys": ["references"], "default": {}},
    "required_memory": {"keys": ["resources", "machine", "memory"], "default": 16},
    "required_disk": {"keys": ["resources", "machine", "disk"], "default": 50},
    "pfam_db": {"keys": ["resources", "hmmer", "pfam_db"], "default": "Pfam-A.hmm"},
    "glimmer_params": {"keys": ["resources", "glimmer"], "default": {}},
    "download_timeout": {"keys": ["resources", "download", "timeout"], "default": 300},
}

def get_environment(config, key):
    """Retrieve a named environment specification, failing on unknown keys.
    """
    envs = get_environments(config)
    if key not in envs:
        raise ValueError("Tool environment %s not found in configuration. Available: %s"
                         % (key, ", ".join(sorted(envs))))
    return envs[key]

def getter(keys, global_default=None, always_list=False):
    def lookup(config, default=None):
        default = global_default if default is None else default
        val = tz.get_in(keys, config, default)
        if always_list:
            if not val:
                val = []
            elif not isinstance(val, (list, tuple)):
                val = [val]
        return val
    return lookup

"""
generate the getter functions but don't override any explicitly defined
"""
_g = globals()
for k, v in LOOKUPS.items():
    getter_fn = "get_" + k
    if getter_fn not in _g:
        _g[getter_fn] = getter(v["keys"], v.get("default", None), v.get("always_list", False))
