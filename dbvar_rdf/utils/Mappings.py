import logging
import os
from types import MappingProxyType

import yaml

from dbvar_rdf.exceptions import MappingError

LOG = logging.getLogger(__name__)

MAPPINGS_FILE = os.path.join(
    os.path.dirname(__file__), '../translationtable/mappings.yaml')


class Mappings:
    """
    Read only lookup tables:
        chromosome:     RefSeq chromosome accession -> HCO chromosome
        variant_class:  dbVar variant class -> SO class curie

    A chromosome may be listed under several assemblies (i.e. chrMT),
    the assembly is then needed to choose one of them.

    Build one at start up (or use `default()`) and hand it to
    whatever needs it; it is never modified afterwards.
    """

    _default = None

    def __init__(self, chromosome=None, variant_class=None):
        self.chromosome = MappingProxyType(dict(chromosome or {}))
        self.variant_class = MappingProxyType(dict(variant_class or {}))

    @classmethod
    def load(cls, path=None):
        if path is None:
            path = MAPPINGS_FILE
        with open(path) as yaml_file:
            tables = yaml.safe_load(yaml_file)
        LOG.debug("Loaded lookup tables from %s", path)
        return cls(tables.get('chromosome'), tables.get('variant_class'))

    @classmethod
    def default(cls):
        """
        The packaged tables, loaded on first use
        """
        if cls._default is None:
            cls._default = cls.load()
        return cls._default

    @staticmethod
    def lookup(table, key, disambiguator=None):
        """
        :param table: one of the mappings
        :param key: str
        :param disambiguator: str suffix choosing among several values
        :return: str value or None when there is no single value
        """
        value = table.get(key)
        if value is None or isinstance(value, str):
            return value

        if disambiguator is None:
            raise MappingError(
                "'{}' maps to {} values, a disambiguator is required".format(
                    key, len(value)))

        candidates = [x for x in value if x.endswith(disambiguator)]
        if len(candidates) != 1:
            LOG.debug(
                "'%s' has %i candidates for '%s'", key, len(candidates),
                disambiguator)
            return None
        return candidates[0]

    def refseq2hco(self, refseq, assembly=None):
        """
        :param refseq: str refseq accession (e.g. NC_000001.11)
        :param assembly: str needed when the accession is shared by
            several assemblies [GRCh37|GRCh38]
        :return: str hco curie or None
        """
        hco = self.lookup(self.chromosome, refseq, assembly)
        if hco is None:
            return None
        return 'hco:' + hco

    def var_class2so(self, var_class):
        """
        :param var_class: str variant class (e.g. copy_number_gain)
        :return: str SO curie or None
        """
        return self.lookup(self.variant_class, var_class)
