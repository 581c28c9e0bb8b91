'''
    Acroname central

    Load the curie mapping file 'curie_map.yaml',
    every node in the graph is written as a curie first

'''
import os.path
import logging
import yaml

LOG = logging.getLogger(__name__)

# read configuration file
with open(os.path.join(os.path.dirname(__file__), 'curie_map.yaml')) as yaml_file:
    curie_map = yaml.safe_load(yaml_file)
    LOG.debug("Finished loading curie maps: %s", curie_map)


def get():
    return curie_map
