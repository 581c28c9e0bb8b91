import logging
from urllib.parse import quote

LOG = logging.getLogger(__name__)


def make_curie(prefix, local_id, encode=True):
    """
    :param prefix: str curie prefix
    :param local_id: str, percent encoded unless `encode` is False
    :return: str curie
    """
    if encode:
        local_id = quote(local_id, safe='')
    return ':'.join((prefix, local_id))


class CurieUtil(object):
    '''
    Expand and compact URIs with a curie map
    '''
    def __init__(self, curie_map):
        '''
        curie_map format is: curie_prefix -> URI_prefix:
        ie: 'dbsnp': 'http://identifiers.org/dbsnp/'

        '''
        self.curie_map = curie_map
        if len(set(curie_map.keys())) != len(set(curie_map.values())):
            LOG.warning("Curie map is NOT one to one!")
            LOG.warning(
                "`get_curie_prefix(IRI)` "
                "may return the same prefix for different base IRI")
        self.uri_map = {value: key for key, value in curie_map.items()}
        # longest namespace first
        self.namespaces = sorted(self.uri_map, key=len, reverse=True)

    def get_curie(self, uri):
        '''Compact a URI, None when no namespace matches '''
        prefix = self.get_curie_prefix(uri)
        if prefix is None:
            return None
        return make_curie(prefix, uri[len(self.curie_map[prefix]):], encode=False)

    def get_curie_prefix(self, uri):
        ''' Return the CURIE's prefix:'''
        for namespace in self.namespaces:
            if uri.startswith(namespace):
                return self.uri_map[namespace]
        return None

    def get_uri(self, curie):
        ''' Get a URI from a CURIE '''
        if curie is None:
            return None
        prefix, sep, local_id = curie.partition(':')
        if not sep:
            if curie != '':
                LOG.error("Not a properly formed curie: \"%s\"", curie)
            return None
        if prefix in self.curie_map:
            return self.curie_map[prefix] + local_id
        LOG.error("Curie prefix not defined for %s", curie)
        return None

    def prefix_exists(self, pfx):
        return pfx in self.curie_map
