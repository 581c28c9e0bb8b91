import gzip
import io
import logging
import re
import sys
from contextlib import contextmanager

from rdflib import Graph as RDFLibGraph, Namespace

from dbvar_rdf.graph.Graph import Graph as DbVarGraph
from dbvar_rdf.graph.RDFGraph import RDFGraph
from dbvar_rdf import curie_map as curimap

LOG = logging.getLogger(__name__)


class StreamedGraph(DbVarGraph):
    """
    Stream turtle to a file handle (or stdout), one fragment per append.

    Each fragment is a graph serialized on its own, so nothing beyond
    the graph being appended is ever held in memory.
    The @prefix block for the whole curie map is written once,
    ahead of the first fragment; the @prefix lines rdflib writes
    for every fragment are dropped.

    Triples are neither sorted nor made unique across fragments.
    """

    curie_map = curimap.get()

    prefix_line = re.compile(r'^@(?:prefix|base)\s.*\n?', re.MULTILINE)

    def __init__(self, file_handle=None):
        if file_handle is None:
            file_handle = sys.stdout.buffer
        self.file_handle = file_handle
        self.header_written = False
        self.fragment_count = 0
        self.bytes_written = 0

    @classmethod
    @contextmanager
    def open(cls, path, compress=False):
        """
        Write to `path` (gzipped if `compress`), closed on leaving the block
        :param path: str output file
        :param compress: boolean
        :return: StreamedGraph
        """
        opener = gzip.open if compress else open
        LOG.info("Writing turtle to %s%s", path, ' (gzip)' if compress else '')
        with opener(path, 'wb') as file_handle:
            yield cls(file_handle=file_handle)

    def append(self, data):
        """
        Serialize a graph, or a single (subject, predicate, object) triple,
        and write it out.

        :param data: RDFGraph, rdflib Graph, or a tuple of curies
        :return: int the number of bytes written
        """
        if isinstance(data, tuple):
            graph = RDFGraph()
            graph.addTriple(*data)
            data = graph

        fragment = self.serialize(data)
        if fragment == '':
            return 0

        written = 0
        if not self.header_written:
            written += self._write(self.header())
            self.header_written = True
        written += self._write(fragment)

        self.fragment_count += 1
        return written

    def addTriple(
            self, subject_id, predicate_id, obj, object_is_literal=False,
            literal_type=None):
        return self.append(
            (subject_id, predicate_id, obj, object_is_literal, literal_type))

    def serialize(self, graph):
        """
        Turtle for `graph`, without any @prefix lines
        :param graph: RDFGraph or rdflib Graph
        :return: str
        """
        if isinstance(graph, RDFGraph):
            turtle = graph.serialize(format='turtle')
        elif isinstance(graph, RDFLibGraph):
            for prefix, iri in self.curie_map.items():
                graph.bind(prefix, Namespace(iri), replace=True)
            turtle = graph.serialize(format='turtle')
        else:
            raise TypeError("Cannot stream {}".format(type(graph).__name__))

        body = self.prefix_line.sub('', turtle).strip()
        if body == '':
            return ''
        return body + '\n\n'

    @classmethod
    def header(cls):
        """
        The @prefix block for every curie prefix
        :return: str
        """
        lines = [
            "@prefix {}: <{}> .\n".format(prefix, iri)
            for prefix, iri in cls.curie_map.items()]
        return ''.join(lines) + '\n'

    def _write(self, text):
        data = text.encode('utf-8')
        if isinstance(self.file_handle, io.TextIOBase):
            self.file_handle.write(text)
        else:
            self.file_handle.write(data)
        self.bytes_written += len(data)
        return len(data)
