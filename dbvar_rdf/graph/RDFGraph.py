import logging

from rdflib import Graph as RDFLibGraph, Literal, URIRef, Namespace

from dbvar_rdf.graph.Graph import Graph as DbVarGraph
from dbvar_rdf.utils.CurieUtil import CurieUtil
from dbvar_rdf import curie_map as curie_map_class

LOG = logging.getLogger(__name__)


class RDFGraph(DbVarGraph, RDFLibGraph):
    """
    Extends RDFLib's Graph
    The goal of this class is wrap the creation
    of triples and manage creation of URIRef
    and literals from an input curie.

    One of these holds the statements made about a single variant.
    """

    curie_map = curie_map_class.get()
    curie_util = CurieUtil(curie_map)

    def __init__(self, identifier=None):
        # only rdf, rdfs, owl, xsd; the curie map supplies the rest
        super().__init__(identifier=identifier, bind_namespaces='core')
        # prefixes actually used, bound when serialized
        self.prefixes = set()

    def addTriple(
            self,
            subject_id,
            predicate_id,
            obj,
            object_is_literal=False,
            literal_type=None
    ):
        if object_is_literal:
            if obj is None or obj == '':
                LOG.warning(
                    "None as literal object for subj: %s and pred: %s",
                    subject_id, predicate_id)
                return
            if literal_type is not None:
                obj = Literal(obj, datatype=self._getnode(literal_type))
            else:
                obj = Literal(obj)
        elif obj is not None and obj != '':  # object is a resource
            obj = self._getnode(obj)
        else:
            LOG.warning(
                "None/empty object IRI for subj: %s and pred: %s",
                subject_id, predicate_id)
            return

        self.add((self._getnode(subject_id), self._getnode(predicate_id), obj))

    def _getnode(self, curie):
        """
        This is a wrapper for creating a URIRef object
        with a given a curie or iri as a string.

        :param curie: str identifier formatted as curie or iri
        :return: node: RDFLib URIRef
        """
        # Check if curie string is actually an IRI
        if curie[:4] == 'http' or curie[:3] == 'ftp':
            return URIRef(curie)

        iri = RDFGraph.curie_util.get_uri(curie)
        if iri is None:
            raise ValueError("couldn't make URI for {}".format(curie))
        self.prefixes.add(curie.split(':')[0])
        return URIRef(iri)

    def bind_all_namespaces(self):
        """
            Results in the RDF @prefix directives for every prefix
            in the curie map being added to this graph.
        """
        for prefix in self.curie_map.keys():
            self.bind(prefix, Namespace(self.curie_map[prefix]), replace=True)

    # rdflib version, with our prefixes in place of rdflib's defaults
    def serialize(
            self, destination=None, format='turtle', base=None, encoding=None,
            **args):
        for prefix in self.prefixes:
            self.bind(prefix, Namespace(self.curie_map[prefix]), replace=True)
        return RDFLibGraph.serialize(
            self, destination=destination, format=format, base=base,
            encoding=encoding, **args)
