import logging
from urllib.parse import quote

from dbvar_rdf.models.Model import Model
from dbvar_rdf.graph.Graph import Graph
from dbvar_rdf.utils.CurieUtil import make_curie
from dbvar_rdf.utils.Mappings import Mappings

LOG = logging.getLogger(__name__)


class ExactPosition():
    """
    A single, known coordinate
    """

    def __init__(self, coordinate):
        self.coordinate = coordinate

    def __eq__(self, other):
        return isinstance(other, ExactPosition) and \
            self.coordinate == other.coordinate

    def __repr__(self):
        return 'ExactPosition({})'.format(self.coordinate)


class FuzzyPosition():
    """
    A position somewhere between an (optional) inner begin and
    an (optional) inner end, each an ExactPosition.
    """

    def __init__(self, begin=None, end=None):
        self.begin = begin
        self.end = end

    def __eq__(self, other):
        return isinstance(other, FuzzyPosition) and \
            (self.begin, self.end) == (other.begin, other.end)

    def __repr__(self):
        return 'FuzzyPosition({!r}, {!r})'.format(self.begin, self.end)


def makePosition(anchor, ambiguity=None, interval=None):
    """
    Choose the faldo position for one side of a variant.

    An ambiguity range (Start_range / End_range) wins over a
    confidence interval (cipos / ciend); with neither, the position
    is exact at the anchor.

    :param anchor: int start (or end) of the variant
    :param ambiguity: pair of absolute coordinates, either may be None
    :param interval: pair of offsets from the anchor, either may be None
    :return: ExactPosition or FuzzyPosition
    """
    if ambiguity is not None:
        lower, upper = _pair(ambiguity)
        return FuzzyPosition(
            None if lower is None else ExactPosition(lower),
            None if upper is None else ExactPosition(upper))

    if interval is not None:
        lower, upper = _pair(interval)
        return FuzzyPosition(
            None if lower is None else ExactPosition(anchor + lower),
            None if upper is None else ExactPosition(anchor + upper))

    return ExactPosition(anchor)


def _pair(values):
    values = list(values) + [None, None]
    return values[0], values[1]


class Feature():
    """
    The location of a variant on a chromosome, following the Faldo model.
    Triples:
    feature_id faldo:location region_id
    region_id a faldo:Region
        faldo:begin begin_position
        faldo:end end_position
    position a faldo:ExactPosition
        faldo:position Integer(numeric position)
        faldo:reference reference_id
    or
    position a faldo:FuzzyPosition
        faldo:begin inner ExactPosition (optional)
        faldo:end inner ExactPosition (optional)
        faldo:reference reference_id

    The region is identified as <feature_id>/position/<build>/<chromosome>,
    the positions hang below it as .../begin and .../end,
    the inner positions of a fuzzy one as ...#begin and ...#end

    """

    def __init__(
            self, graph, feature_id, chromosome, reference=None, mappings=None):

        if isinstance(graph, Graph):
            self.graph = graph
        else:
            raise ValueError("{} is not a graph".format(graph))
        self.model = Model(self.graph)
        self.globaltt = self.graph.globaltt
        self.mappings = mappings if mappings is not None else Mappings.default()
        self.fid = feature_id
        self.chromosome = chromosome
        self.reference = reference
        self.start = None
        self.stop = None

    def addFeatureStartLocation(self, coordinate, ambiguity=None, interval=None):
        """
        Adds coordinate details for the start of this feature.
        :param coordinate: int
        :param ambiguity: Start_range pair
        :param interval: cipos pair

        """
        self.start = makePosition(coordinate, ambiguity, interval)

    def addFeatureEndLocation(self, coordinate, ambiguity=None, interval=None):
        """
        Adds the coordinate details for the end of this feature
        :param coordinate: int
        :param ambiguity: End_range pair
        :param interval: ciend pair

        """
        self.stop = makePosition(coordinate, ambiguity, interval)

    def getReferenceIds(self):
        """
        The chromosome, as HCO and RefSeq when the accession is known,
        or as an INSDC sequence otherwise.
        Raises MappingError if the accession needs a build we lack.
        :return: list of curies
        """
        hco = self.mappings.refseq2hco(self.chromosome, self.reference)
        if hco is not None:
            return [hco, make_curie('refseq', self.chromosome)]
        return [make_curie('insdc', self.chromosome)]

    def getRegionId(self):
        parts = [self.fid, 'position']
        if self.reference is not None:
            parts.append(self.reference)
        parts.append(quote(self.chromosome, safe=''))
        return '/'.join(parts)

    def addFeatureToGraph(self):
        """
        :return: region_id
        """
        reference_ids = self.getReferenceIds()
        region_id = self.getRegionId()

        self.graph.addTriple(self.fid, self.globaltt['location'], region_id)
        self.model.addType(region_id, self.globaltt['Region'])

        if self.start is not None:
            begin_id = region_id + '/begin'
            self.graph.addTriple(region_id, self.globaltt['begin'], begin_id)
            self.addPositionToGraph(begin_id, self.start, reference_ids)

        if self.stop is not None:
            end_id = region_id + '/end'
            self.graph.addTriple(region_id, self.globaltt['end'], end_id)
            self.addPositionToGraph(end_id, self.stop, reference_ids)

        return region_id

    def addPositionToGraph(self, position_id, position, reference_ids):
        """
        :param position_id: curie
        :param position: ExactPosition or FuzzyPosition
        :param reference_ids: list of curies
        :return: position_id
        """
        if isinstance(position, FuzzyPosition):
            self.model.addType(position_id, self.globaltt['FuzzyPosition'])
            for side, inner in (('begin', position.begin), ('end', position.end)):
                if inner is None:
                    continue
                inner_id = position_id + '#' + side
                self.graph.addTriple(position_id, self.globaltt[side], inner_id)
                self._addExactPosition(inner_id, inner.coordinate)
        else:
            self._addExactPosition(position_id, position.coordinate)

        for reference_id in reference_ids:
            self.graph.addTriple(
                position_id, self.globaltt['reference'], reference_id)

        return position_id

    def _addExactPosition(self, position_id, coordinate):
        self.model.addType(position_id, self.globaltt['ExactPosition'])
        self.graph.addTriple(
            position_id, self.globaltt['position'], coordinate,
            object_is_literal=True, literal_type=self.globaltt['integer'])
