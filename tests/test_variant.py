#!/usr/bin/env python3

import os
import unittest
import logging
from rdflib import URIRef, Literal, XSD, RDF, RDFS

from dbvar_rdf.exceptions import FormatError, ValidationError
from dbvar_rdf.models.Variant import (
    MODELS, VariantBuilder, VariantCall, VariantRegion)
from dbvar_rdf.sources.GVF import GVF
from dbvar_rdf.utils.TestUtils import TestUtils

logging.basicConfig(level=logging.WARNING)
LOG = logging.getLogger(__name__)

GVF_DIR = os.path.join(os.path.dirname(__file__), 'resources', 'gvf')

VARIANT_CALL = 'http://med2rdf.org/dbvar/variant_call/'
VARIATION = 'http://med2rdf.org/dbvar/variation/'
M2R = 'http://med2rdf.org/ontology/med2rdf#'
DBVAR = 'http://purl.jp/bio/10/dbvar/'
FALDO = 'http://biohackathon.org/resource/faldo#'
SIO_HAS_ATTRIBUTE = URIRef('http://semanticscience.org/resource/SIO_000216')
DC_IS_PART_OF = URIRef('http://purl.org/dc/terms/isPartOf')


def read_records(name):
    with GVF.open(os.path.join(GVF_DIR, name)) as reader:
        return list(reader)


class VariantCallTestCase(unittest.TestCase):

    def setUp(self):
        self.records = read_records('variant_call.gvf')
        self.builder = VariantBuilder('variant_call')

    def tearDown(self):
        self.records = None
        self.builder = None

    def test_example_line(self):
        """
        the smallest useful line: an id, an allele and one cross reference
        """
        record = read_records('example.gvf')[0]
        variant = self.builder.variant(record)
        self.assertEqual(variant.id, 'esv1')
        self.assertEqual(variant.start, 100)
        self.assertEqual(variant.end, 200)
        self.assertEqual(variant.reference, 'GRCh38')
        self.assertEqual(variant.cross_references, [('dbSNP', 'rs5')])

        region = VARIANT_CALL + 'esv1/position/GRCh38/chr1'
        expected = """
dbvarvc:esv1 a dbvar:VariantCall, obo:SO_0000159 ;
    dc:identifier "esv1" ;
    obo:RO_0002162 <http://identifiers.org/taxonomy/9606> ;
    m2r:alternative_allele "A" ;
    faldo:location <{region}> ;
    rdfs:seeAlso dbsnp:rs5 .
<{region}> a faldo:Region ;
    faldo:begin <{region}/begin> ;
    faldo:end <{region}/end> .
<{region}/begin> a faldo:ExactPosition ;
    faldo:position 100 ;
    faldo:reference insdc:chr1 .
<{region}/end> a faldo:ExactPosition ;
    faldo:position 200 ;
    faldo:reference insdc:chr1 .
""".format(region=region)
        self.assertTrue(TestUtils.test_graph_equality(expected, variant.to_rdf()))

    def test_fields_from_gvf(self):
        variant = self.builder.variant(self.records[0])
        self.assertEqual(variant.id, 'nssv14499272')
        self.assertEqual(variant.reference, 'GRCh38')
        self.assertEqual(variant.chromosome, 'NC_000001.11')
        self.assertEqual(variant.variation_class, 'copy_number_gain')
        self.assertEqual(variant.start_range, [None, 10001])
        self.assertEqual(variant.end_range, [22118, None])
        self.assertEqual(variant.parents, ['nsv4000032'])
        self.assertEqual(variant.allele_count, 3)
        self.assertEqual(variant.allele_number, 10)
        self.assertEqual(variant.allele_frequency, 0.3)
        self.assertEqual(variant.cross_references, [
            ('dbSNP', 'rs12345'),
            ('URL', 'https://www.ncbi.nlm.nih.gov/dbvar'),
            ('GENBANK', 'NM_000546.5')])

    def test_statements(self):
        graph = self.builder.build(self.records[0])
        subject = URIRef(VARIANT_CALL + 'nssv14499272')

        self.assertTrue(
            (subject, RDF.type, URIRef(DBVAR + 'VariantCall')) in graph)
        self.assertTrue(
            (subject, RDF.type,
             URIRef('http://purl.obolibrary.org/obo/SO_0001742')) in graph)
        self.assertTrue(
            (subject, DC_IS_PART_OF, URIRef(VARIATION + 'nsv4000032')) in graph)
        see_also = set(graph.objects(subject, RDFS.seeAlso))
        self.assertEqual(see_also, {
            URIRef('http://identifiers.org/dbsnp/rs12345'),
            URIRef('http://identifiers.org/refseq/NM_000546.5')})

    def test_value_nodes(self):
        graph = self.builder.build(self.records[0])
        subject = URIRef(VARIANT_CALL + 'nssv14499272')

        nodes = set(graph.objects(subject, SIO_HAS_ATTRIBUTE))
        self.assertEqual(nodes, {
            URIRef(VARIANT_CALL + 'nssv14499272/frequency'),
            URIRef(VARIANT_CALL + 'nssv14499272/allele_count'),
            URIRef(VARIANT_CALL + 'nssv14499272/allele_total')})
        self.assertTrue(
            (URIRef(VARIANT_CALL + 'nssv14499272/frequency'), RDF.value,
             Literal(0.3, datatype=XSD.double)) in graph)
        self.assertTrue(
            (URIRef(VARIANT_CALL + 'nssv14499272/allele_count'), RDF.type,
             URIRef(DBVAR + 'AlleleCount')) in graph)
        self.assertTrue(
            (URIRef(VARIANT_CALL + 'nssv14499272/allele_total'), RDF.value,
             Literal(10, datatype=XSD.integer)) in graph)

    def test_ambiguous_positions(self):
        graph = self.builder.build(self.records[0])
        region = VARIANT_CALL + 'nssv14499272/position/GRCh38/NC_000001.11'

        for side in ('begin', 'end'):
            self.assertTrue(
                (URIRef(region + '/' + side), RDF.type,
                 URIRef(FALDO + 'FuzzyPosition')) in graph)
        self.assertTrue(
            (URIRef(region + '/begin#end'), URIRef(FALDO + 'position'),
             Literal(10001, datatype=XSD.integer)) in graph)
        self.assertTrue(
            (URIRef(region + '/end#begin'), URIRef(FALDO + 'position'),
             Literal(22118, datatype=XSD.integer)) in graph)
        self.assertFalse((URIRef(region + '/begin#begin'), None, None) in graph)
        self.assertFalse((URIRef(region + '/end#end'), None, None) in graph)

    def test_phenotypes_and_intervals(self):
        graph = self.builder.build(self.records[1])
        subject = URIRef(VARIANT_CALL + 'nssv2')
        region = VARIANT_CALL + 'nssv2/position/GRCh38/NC_000001.11'

        self.assertTrue(
            (subject, URIRef(M2R + 'zygosity'), Literal('Heterozygous')) in graph)
        self.assertTrue(
            (subject, URIRef(M2R + 'clinical_significance'),
             Literal('Pathogenic')) in graph)
        self.assertTrue(
            (subject, URIRef(M2R + 'phenotype'), Literal('Autism')) in graph)
        diseases = set(graph.objects(subject, URIRef(M2R + 'disease')))
        self.assertEqual(diseases, {
            URIRef('http://identifiers.org/hp/0000717'),
            URIRef('http://identifiers.org/doid/DOID:0060041')})
        self.assertEqual(self.builder.phenotypes.dropped['Unknown'], 1)

        self.assertTrue(
            (URIRef(region + '/begin#begin'), URIRef(FALDO + 'position'),
             Literal(49991, datatype=XSD.integer)) in graph)
        self.assertTrue(
            (URIRef(region + '/end#end'), URIRef(FALDO + 'position'),
             Literal(60005, datatype=XSD.integer)) in graph)

    def test_non_numeric_count(self):
        with self.assertRaises(FormatError):
            self.builder.build(self.records[2])

    def test_missing_chromosome(self):
        variant = self.builder.variant(self.records[3])
        with self.assertRaises(ValidationError) as context:
            variant.to_rdf()
        self.assertEqual(context.exception.missing, ('chromosome',))
        self.assertIsNone(variant._graph)


class VariantTestCase(unittest.TestCase):

    def setUp(self):
        self.fields = {
            'chromosome': 'NC_000001.11',
            'variation_class': 'deletion',
            'start': 1,
            'end': 2,
            'id': 'nssv1',
        }

    def tearDown(self):
        self.fields = None

    def test_statements_are_built_once(self):
        variant = VariantCall(**self.fields)
        graph = variant.to_rdf()
        size = len(graph)
        self.assertIs(variant.to_rdf(), graph)
        self.assertEqual(len(variant.to_rdf()), size)

    def test_all_required_fields_are_named(self):
        variant = VariantCall(chromosome='NC_000001.11')
        with self.assertRaises(ValidationError) as context:
            variant.to_rdf()
        self.assertEqual(
            context.exception.missing, ('variation_class', 'start', 'end', 'id'))

    def test_unmapped_variant_class(self):
        self.fields['variation_class'] = 'not_a_class'
        graph = VariantCall(**self.fields).to_rdf()
        subject = URIRef(VARIANT_CALL + 'nssv1')
        self.assertEqual(
            list(graph.objects(subject, RDF.type)),
            [URIRef(DBVAR + 'VariantCall')])

    def test_parents_must_be_variants(self):
        self.fields['parents'] = ['nsv1', 'not a variant', None]
        graph = VariantCall(**self.fields).to_rdf()
        self.assertEqual(
            list(graph.objects(URIRef(VARIANT_CALL + 'nssv1'), DC_IS_PART_OF)),
            [URIRef(VARIATION + 'nsv1')])

    def test_variant_region(self):
        graph = VariantRegion(**self.fields).to_rdf()
        subject = URIRef(VARIATION + 'nssv1')
        self.assertTrue(
            (subject, RDF.type, URIRef(DBVAR + 'VariantRegion')) in graph)
        self.assertTrue(
            (subject, URIRef(FALDO + 'location'),
             URIRef(VARIATION + 'nssv1/position/NC_000001.11')) in graph)

    def test_id_is_percent_encoded_in_iris(self):
        self.fields['id'] = 'esv 1/a'
        variant = VariantCall(**self.fields)
        self.assertEqual(variant.getSubjectId(), 'dbvarvc:esv%201%2Fa')
        graph = variant.to_rdf()
        subject = URIRef(VARIANT_CALL + 'esv%201%2Fa')
        self.assertTrue(
            (subject, URIRef('http://purl.org/dc/terms/identifier'),
             Literal('esv 1/a')) in graph)
        self.assertTrue(
            (subject, URIRef(FALDO + 'location'),
             URIRef(VARIANT_CALL + 'esv%201%2Fa/position/NC_000001.11')) in graph)
        # every subject comes out as a valid IRI
        for node in graph.subjects():
            self.assertNotIn(' ', str(node))

    def test_taxon(self):
        graph = VariantCall(taxon='tax:10090', **self.fields).to_rdf()
        self.assertTrue(
            (URIRef(VARIANT_CALL + 'nssv1'),
             URIRef('http://purl.obolibrary.org/obo/RO_0002162'),
             URIRef('http://identifiers.org/taxonomy/10090')) in graph)

    def test_unknown_field(self):
        with self.assertRaises(TypeError):
            VariantCall(colour='blue')

    def test_models(self):
        self.assertIs(MODELS['variant_call'], VariantCall)
        self.assertIs(MODELS['variant_region'], VariantRegion)
        with self.assertRaises(ValueError):
            VariantBuilder('variant')

    def test_assembly_from_assembly_name(self):
        record = read_records('example.gvf')[0]
        variant = VariantRegion.from_gvf(record)
        self.assertEqual(variant.reference, 'GRCh38')
        self.assertEqual(variant.getSubjectId(), 'dbvarv:esv1')


if __name__ == '__main__':
    unittest.main()
