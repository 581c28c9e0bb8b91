import logging
from pathlib import Path

from rdflib import Graph as RDFLibGraph, URIRef

from dbvar_rdf import curie_map
from dbvar_rdf.graph.StreamedGraph import StreamedGraph
from dbvar_rdf.utils.CurieUtil import CurieUtil

LOG = logging.getLogger(__name__)


class TestUtils:
    """
    Check graphs against turtle fragments written the way
    StreamedGraph writes them, with no @prefix lines of their own
    """

    # not a test case
    __test__ = False

    curie_util = CurieUtil(curie_map.get())

    @classmethod
    def parse_fragment(cls, turtlish):
        """
        :param turtlish: .ttl file path or string of turtle
                         without prefix header
        :return: rdflib Graph
        """
        if turtlish.endswith('.ttl') and Path(turtlish).is_file():
            turtlish = Path(turtlish).read_text()
        graph = RDFLibGraph()
        graph.parse(data=StreamedGraph.header() + turtlish, format='turtle')
        return graph

    @classmethod
    def describe(cls, triples):
        """
        :param triples: iterable of rdflib triples
        :return: sorted list of 'subject predicate object' strings in curies
        """
        return sorted(' '.join(cls._term(node) for node in triple) for triple in triples)

    @classmethod
    def _term(cls, node):
        if isinstance(node, URIRef):
            curie = cls.curie_util.get_curie(str(node))
            if curie is not None:
                return curie
        return node.n3()

    @classmethod
    def test_graph_equality(cls, turtlish, graph):
        """
        :param turtlish: see parse_fragment
        :param graph: Graph object to test against
        :return: Boolean, True if both hold the same set of triples
        """
        expected = set(cls.parse_fragment(turtlish))
        found = set(graph)
        if expected == found:
            return True
        LOG.warning(
            "Triples do not match\n\tmissing: %s\n\tunexpected: %s",
            cls.describe(expected - found), cls.describe(found - expected))
        return False
