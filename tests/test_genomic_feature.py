#!/usr/bin/env python3

import unittest
import logging
from rdflib import URIRef, Literal, XSD, RDF

from dbvar_rdf.exceptions import MappingError
from dbvar_rdf.graph.RDFGraph import RDFGraph
from dbvar_rdf.models.GenomicFeature import (
    ExactPosition, Feature, FuzzyPosition, makePosition)
from dbvar_rdf.utils.Mappings import Mappings
from dbvar_rdf.utils.TestUtils import TestUtils

logging.basicConfig(level=logging.WARNING)
LOG = logging.getLogger(__name__)

FALDO = 'http://biohackathon.org/resource/faldo#'
REGION = 'http://med2rdf.org/dbvar/variant_call/nssv1/position/GRCh38/NC_000001.11'


class MakePositionTestCase(unittest.TestCase):

    def test_exact(self):
        self.assertEqual(makePosition(100), ExactPosition(100))

    def test_range(self):
        self.assertEqual(
            makePosition(100, [90, 110]),
            FuzzyPosition(ExactPosition(90), ExactPosition(110)))

    def test_range_with_unknown_bound(self):
        self.assertEqual(
            makePosition(100, [None, 100]),
            FuzzyPosition(None, ExactPosition(100)))

    def test_interval_is_relative(self):
        self.assertEqual(
            makePosition(100, interval=[-10, 5]),
            FuzzyPosition(ExactPosition(90), ExactPosition(105)))

    def test_range_wins_over_interval(self):
        self.assertEqual(
            makePosition(100, [80, 120], [-10, 5]),
            FuzzyPosition(ExactPosition(80), ExactPosition(120)))

    def test_fuzzy_without_bounds(self):
        self.assertEqual(makePosition(100, [None, None]), FuzzyPosition())

    def test_single_offset(self):
        self.assertEqual(
            makePosition(100, interval=[-10]),
            FuzzyPosition(ExactPosition(90), None))


class FeatureTestCase(unittest.TestCase):

    def setUp(self):
        self.graph = RDFGraph()
        self.mappings = Mappings.default()

    def tearDown(self):
        self.graph = None

    def test_exact_location(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'NC_000001.11', 'GRCh38', self.mappings)
        feature.addFeatureStartLocation(100)
        feature.addFeatureEndLocation(200)
        region_id = feature.addFeatureToGraph()

        self.assertEqual(
            region_id, 'dbvarvc:nssv1/position/GRCh38/NC_000001.11')
        expected = """
dbvarvc:nssv1 faldo:location <{region}> .
<{region}> a faldo:Region ;
    faldo:begin <{region}/begin> ;
    faldo:end <{region}/end> .
<{region}/begin> a faldo:ExactPosition ;
    faldo:position 100 ;
    faldo:reference <http://identifiers.org/hco/1/GRCh38>,
        <http://identifiers.org/refseq/NC_000001.11> .
<{region}/end> a faldo:ExactPosition ;
    faldo:position 200 ;
    faldo:reference <http://identifiers.org/hco/1/GRCh38>,
        <http://identifiers.org/refseq/NC_000001.11> .
""".format(region=REGION)
        self.assertTrue(TestUtils.test_graph_equality(expected, self.graph))

    def test_fuzzy_location(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'NC_000001.11', 'GRCh38', self.mappings)
        feature.addFeatureStartLocation(100, [None, 100])
        feature.addFeatureEndLocation(200, interval=[-5, 5])
        feature.addFeatureToGraph()

        begin = URIRef(REGION + '/begin')
        end = URIRef(REGION + '/end')
        self.assertTrue(
            (begin, RDF.type, URIRef(FALDO + 'FuzzyPosition')) in self.graph)
        self.assertFalse(
            (begin, URIRef(FALDO + 'begin'), None) in self.graph)
        self.assertTrue(
            (begin, URIRef(FALDO + 'end'), URIRef(REGION + '/begin#end'))
            in self.graph)
        self.assertTrue(
            (URIRef(REGION + '/begin#end'), URIRef(FALDO + 'position'),
             Literal(100, datatype=XSD.integer)) in self.graph)
        self.assertTrue(
            (URIRef(REGION + '/end#begin'), URIRef(FALDO + 'position'),
             Literal(195, datatype=XSD.integer)) in self.graph)
        self.assertTrue(
            (URIRef(REGION + '/end#end'), URIRef(FALDO + 'position'),
             Literal(205, datatype=XSD.integer)) in self.graph)
        # the fuzzy position itself has no coordinate
        self.assertFalse(
            (end, URIRef(FALDO + 'position'), None) in self.graph)
        self.assertEqual(
            len(list(self.graph.objects(end, URIRef(FALDO + 'reference')))), 2)

    def test_unmapped_chromosome_falls_back_to_insdc(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'chr1', 'GRCh38', self.mappings)
        self.assertEqual(feature.getReferenceIds(), ['insdc:chr1'])

    def test_region_without_build(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'NC_000001.11', None, self.mappings)
        self.assertEqual(
            feature.getRegionId(), 'dbvarvc:nssv1/position/NC_000001.11')
        self.assertEqual(
            feature.getReferenceIds(), ['hco:1/GRCh38', 'refseq:NC_000001.11'])

    def test_chromosome_is_percent_encoded(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'chr 1<x>', 'GRCh38', self.mappings)
        self.assertEqual(
            feature.getRegionId(), 'dbvarvc:nssv1/position/GRCh38/chr%201%3Cx%3E')
        self.assertEqual(feature.getReferenceIds(), ['insdc:chr%201%3Cx%3E'])

    def test_shared_chromosome_without_build(self):
        feature = Feature(
            self.graph, 'dbvarvc:nssv1', 'NC_012920.1', None, self.mappings)
        feature.addFeatureStartLocation(10)
        with self.assertRaises(MappingError):
            feature.addFeatureToGraph()
        self.assertEqual(len(self.graph), 0)

    def test_feature_needs_a_graph(self):
        with self.assertRaises(ValueError):
            Feature(None, 'dbvarvc:nssv1', 'NC_000001.11')


if __name__ == '__main__':
    unittest.main()
