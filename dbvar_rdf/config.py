import os.path
import logging
import yaml

LOG = logging.getLogger(__name__)

# default configuration
DEFAULTS = {
    'model': 'variant_call',
    'taxon': 'tax:9606',
    'compress': False,
}

conf = dict(DEFAULTS)

'''
    Load the configuration file 'conf.yaml', if it exists.
    Nothing in it is required, it only overrides the defaults above.
    Another file may be loaded later with `load()` (the cli `--config`)
'''

CONF_FILE = os.path.join(os.path.dirname(__file__), 'conf.yaml')

if os.path.exists(CONF_FILE):
    with open(CONF_FILE) as yaml_file:
        conf.update(yaml.safe_load(yaml_file) or {})
        LOG.debug("Finished loading %s", CONF_FILE)
else:
    LOG.debug("'conf.yaml' not found in '%s', using defaults", os.path.dirname(__file__))


def load(path):
    """
    Read a yaml config file over the current configuration
    :param path: str path of a yaml mapping
    :return: dict the active configuration
    """
    with open(path) as yaml_file:
        overrides = yaml.safe_load(yaml_file) or {}
    if not isinstance(overrides, dict):
        raise ValueError("{} does not hold a yaml mapping".format(path))
    unknown = set(overrides) - set(DEFAULTS)
    if unknown:
        LOG.warning("Ignoring unknown config key(s) in %s: %s", path, sorted(unknown))
    for key in set(overrides) & set(DEFAULTS):
        conf[key] = overrides[key]
    LOG.info("Loaded configuration from %s", path)
    return conf


def get_config():
    return conf
