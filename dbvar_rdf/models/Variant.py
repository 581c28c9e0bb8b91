import logging
import re

from dbvar_rdf.exceptions import FormatError, ValidationError
from dbvar_rdf.graph.RDFGraph import RDFGraph
from dbvar_rdf.models.GenomicFeature import Feature
from dbvar_rdf.models.Model import Model
from dbvar_rdf.models.Xref import (
    CROSS_REFERENCE_RULES, PHENOTYPE_RULES, XrefResolver)
from dbvar_rdf.utils.CurieUtil import make_curie
from dbvar_rdf.utils.Mappings import Mappings

LOG = logging.getLogger(__name__)

ASSEMBLY = re.compile(r'(GRCh\d+)')
PARENT = re.compile(r'([en]sv\d+)')
DEFAULT_TAXON = 'tax:9606'


class Variant():
    """
    A dbVar variant, as read from one GVF feature line.

    Subclasses say where the variant lives (`base`, the curie prefix
    its id is appended to) and what it is (`class_label`, looked up in
    the global translation table).

    Fields are plain attributes, None when absent. `to_rdf()` checks the
    required ones, then builds the statements about the variant once;
    later calls return the same graph.
    """

    REQUIRED = ('chromosome', 'variation_class', 'start', 'end', 'id')

    base = None
    class_label = None

    def __init__(
            self, mappings=None, xrefs=None, phenotypes=None, taxon=None,
            **fields):
        self.mappings = mappings if mappings is not None else Mappings.default()
        self.xrefs = xrefs if xrefs is not None \
            else XrefResolver(CROSS_REFERENCE_RULES)
        self.phenotype_resolver = phenotypes if phenotypes is not None \
            else XrefResolver(PHENOTYPE_RULES)
        self.taxon = taxon if taxon is not None else DEFAULT_TAXON

        self.reference = None             # GRCh37 | GRCh38
        self.chromosome = None            # seqid, i.e. NC_000001.11
        self.variation_class = None       # SO term label
        self.start = None
        self.end = None
        self.id = None
        self.cross_references = None      # [(source, id)]
        self.alternative_allele = None
        self.reference_allele = None
        self.start_range = None           # [int|None, int|None]
        self.end_range = None
        self.zygosity = None
        self.parents = None
        self.clinical_significance = None
        self.phenotype_names = None
        self.phenotypes = None            # [(source, id)]
        self.cipos = None                 # offsets from start
        self.ciend = None                 # offsets from end
        self.allele_count = None
        self.allele_number = None
        self.allele_frequency = None

        for key, value in fields.items():
            if not hasattr(self, key):
                raise TypeError("unknown variant field '{}'".format(key))
            setattr(self, key, value)

        self._graph = None

    @classmethod
    def from_gvf(cls, record, **kwargs):
        """
        :param record: sources.GVF.Record
        :param kwargs: passed to the constructor (mappings, resolvers, taxon)
        :return: Variant of this class
        """
        attributes = record.attributes
        variant = cls(**kwargs)

        variant.reference = _assembly(record.header)
        variant.chromosome = record.seqid
        variant.variation_class = record.type
        variant.start = record.start
        variant.end = record.end

        variant.id = _first(attributes, 'Name') or _first(attributes, 'ID')
        variant.cross_references = _pairs(attributes, 'Dbxref')
        variant.alternative_allele = _first(attributes, 'Variant_seq')
        variant.reference_allele = _first(attributes, 'Reference_seq')
        variant.start_range = _integers(attributes, 'Start_range')
        variant.end_range = _integers(attributes, 'End_range')
        variant.zygosity = _first(attributes, 'Zygosity')

        variant.parents = _values(attributes, 'parent')
        variant.clinical_significance = _values(attributes, 'clinical_int')
        variant.phenotype_names = _values(attributes, 'phenotype')
        variant.phenotypes = _pairs(attributes, 'phenotype_id')
        variant.cipos = _integers(attributes, 'cipos')
        variant.ciend = _integers(attributes, 'ciend')
        variant.allele_count = _number(attributes, 'allele_count', int)
        variant.allele_number = _number(attributes, 'allele_number', int)
        variant.allele_frequency = _number(attributes, 'allele_frequency', float)

        return variant

    def validate(self):
        missing = [
            field for field in self.REQUIRED
            if getattr(self, field) is None or getattr(self, field) == '']
        if missing:
            raise ValidationError(missing)

    def getSubjectId(self):
        return make_curie(self.base, self.id)

    def to_rdf(self):
        """
        The statements about this variant
        :return: RDFGraph
        """
        if self._graph is not None:
            return self._graph

        self.validate()

        graph = RDFGraph()
        model = Model(graph)
        globaltt = graph.globaltt
        subject = self.getSubjectId()

        model.addType(subject, globaltt[self.class_label])
        so_type = self.mappings.var_class2so(self.variation_class)
        if so_type is not None:
            model.addType(subject, so_type)
        else:
            LOG.debug("No SO class for '%s'", self.variation_class)

        graph.addTriple(
            subject, globaltt['identifier'], self.id, object_is_literal=True)
        graph.addTriple(subject, globaltt['in taxon'], self.taxon)

        for label, value in (
                ('alternative allele', self.alternative_allele),
                ('reference allele', self.reference_allele),
                ('zygosity', self.zygosity)):
            if value is not None:
                graph.addTriple(
                    subject, globaltt[label], value, object_is_literal=True)

        for parent in self.parents or []:
            if parent is None:
                continue
            match = PARENT.search(parent)
            if match is not None:
                graph.addTriple(
                    subject, globaltt['is part of'], 'dbvarv:' + match.group(1))

        for label, values in (
                ('clinical significance', self.clinical_significance),
                ('phenotype', self.phenotype_names)):
            for value in values or []:
                if value is not None:
                    graph.addTriple(
                        subject, globaltt[label], value, object_is_literal=True)

        self._addValues(graph, model, subject)
        self._addLocation(graph, subject)

        for source, raw_id in self.cross_references or []:
            target = self.xrefs.resolve(source, raw_id)
            if target is not None:
                model.addSeeAlso(subject, target)

        for source, raw_id in self.phenotypes or []:
            target = self.phenotype_resolver.resolve(source, raw_id)
            if target is not None:
                graph.addTriple(subject, globaltt['disease'], target)

        self._graph = graph
        return graph

    def _addValues(self, graph, model, subject):
        globaltt = graph.globaltt
        # node suffix, node class, value, xsd type
        for suffix, label, value, xsd in (
                ('frequency', 'Frequency', self.allele_frequency, 'double'),
                ('allele_count', 'AlleleCount', self.allele_count, 'integer'),
                ('allele_total', 'AlleleTotal', self.allele_number, 'integer')):
            if value is None:
                continue
            model.addValueNode(
                subject, '/'.join((subject, suffix)), globaltt[label], value,
                globaltt[xsd])

    def _addLocation(self, graph, subject):
        feature = Feature(
            graph, subject, self.chromosome, self.reference, self.mappings)
        feature.addFeatureStartLocation(
            self.start, self.start_range, self.cipos)
        feature.addFeatureEndLocation(self.end, self.end_range, self.ciend)
        return feature.addFeatureToGraph()


class VariantCall(Variant):
    base = 'dbvarvc'
    class_label = 'VariantCall'


class VariantRegion(Variant):
    base = 'dbvarv'
    class_label = 'VariantRegion'


MODELS = {
    'variant_call': VariantCall,
    'variant_region': VariantRegion,
}


class VariantBuilder():
    """
    Makes the statement set for each record of a run, with one
    model class and one set of lookup tables and resolvers, so the
    resolvers' drop counts cover the whole run.
    """

    def __init__(
            self, model='variant_call', mappings=None, xrefs=None,
            phenotypes=None, taxon=None):
        if model not in MODELS:
            raise ValueError(
                "unknown model '{}', expected one of {}".format(
                    model, ', '.join(sorted(MODELS))))
        self.model = MODELS[model]
        self.mappings = mappings if mappings is not None else Mappings.default()
        self.xrefs = xrefs if xrefs is not None \
            else XrefResolver(CROSS_REFERENCE_RULES)
        self.phenotypes = phenotypes if phenotypes is not None \
            else XrefResolver(PHENOTYPE_RULES)
        self.taxon = taxon if taxon is not None else DEFAULT_TAXON

    def variant(self, record):
        return self.model.from_gvf(
            record, mappings=self.mappings, xrefs=self.xrefs,
            phenotypes=self.phenotypes, taxon=self.taxon)

    def build(self, record):
        """
        :param record: sources.GVF.Record
        :return: RDFGraph
        """
        return self.variant(record).to_rdf()


def _assembly(header):
    for key in ('genome-build', 'assembly-name'):
        match = ASSEMBLY.search(header.get(key) or '')
        if match is not None:
            return match.group(1)
    return None


def _values(attributes, tag):
    return attributes.get(tag) or None


def _first(attributes, tag):
    values = attributes.get(tag)
    if not values:
        return None
    return values[0]


def _pairs(attributes, tag):
    values = attributes.get(tag)
    if not values:
        return None
    pairs = []
    for value in values:
        if value is None:
            continue
        source, sep, raw_id = value.partition(':')
        pairs.append((source, raw_id if sep else None))
    return pairs


def _integers(attributes, tag):
    values = attributes.get(tag)
    if not values:
        return None
    try:
        return [None if x is None else int(x) for x in values]
    except ValueError as err:
        raise FormatError("{}: {}".format(tag, err)) from err


def _number(attributes, tag, kind):
    value = _first(attributes, tag)
    if value is None or value == '':
        return None
    try:
        return kind(value)
    except ValueError as err:
        raise FormatError("{}: {}".format(tag, err)) from err
