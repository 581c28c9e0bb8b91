import gzip
import logging
import re
import sys
from collections import namedtuple
from contextlib import contextmanager
from types import MappingProxyType
from urllib.parse import quote, unquote

from dbvar_rdf.exceptions import ConversionError, FormatError

LOG = logging.getLogger(__name__)

COLUMN_DELIMITER = '\t'
ATTRIBUTE_DELIMITER = ';'
VALUE_DELIMITER = ','
PRAGMA = '##'
COMMENT = '#'
MISSING_VALUE = '.'
STRANDS = ('+', '-')
UNKNOWN_STRANDS = ('', MISSING_VALUE, '?')

# '=' is reserved in attribute values, so an unquoted item such as
# `Name=nsv1` inside a value list is really the next tag
TAG_VALUE = re.compile(r'^([A-Za-z_][A-Za-z0-9_]*)=(.*)$', re.DOTALL)

# "" inside quotes is a literal quote
QUOTED_ITEM = re.compile(r'"((?:[^"]|"")*)"', re.DOTALL)
PLAIN_ITEM = re.compile(r'[^,]*')


Record = namedtuple(
    'Record', [
        'seqid',        # chromosome or contig
        'source',       # algorithm or database
        'type',         # SO term of the sequence_alteration
        'start',        # 1-based, plus strand
        'end',
        'score',        # float or None
        'strand',       # '+', '-' or None
        'phase',        # int or None
        'attributes',   # Attributes
        'header',       # pragmas seen before the data lines
        'line_num',
    ])


class Attributes(dict):
    """
    The ninth column:  tag1=value1,value2;tag2=value1;

    Each tag maps to the list of its values,
    percent decoded, with None standing for '.'
    """

    @classmethod
    def parse(cls, column):
        attributes = cls()
        for group in column.split(ATTRIBUTE_DELIMITER):
            if group.strip() == '':
                continue
            tag, sep, value = group.partition('=')
            tag = tag.strip()
            if tag == '':
                raise FormatError("attribute without a tag: '{}'".format(group))
            attributes.setdefault(tag, [])
            if not sep or value == '':
                continue

            for item, quoted in cls._split_values(value):
                mch = None if quoted else TAG_VALUE.match(item)
                if mch is not None:
                    tag = mch.group(1)
                    attributes.setdefault(tag, [])
                    item = mch.group(2)
                attributes[tag].append(cls._decode(item, quoted))

        return attributes

    @staticmethod
    def _split_values(value):
        """
        Split a value list on commas outside double quotes
        :param value: str
        :return: list of (item, quoted) tuples
        """
        items = []
        pos = 0
        while True:
            mch = QUOTED_ITEM.match(value, pos)
            if mch is not None:
                items.append((mch.group(1).replace('""', '"'), True))
            elif value.startswith('"', pos):
                raise FormatError(
                    "unterminated quote in attribute value '{}'".format(value))
            else:
                mch = PLAIN_ITEM.match(value, pos)
                items.append((mch.group(0), False))
            pos = mch.end()
            if pos == len(value):
                return items
            if value[pos] != VALUE_DELIMITER:
                raise FormatError(
                    "unexpected text after a quoted item in '{}'".format(value))
            pos += 1

    @staticmethod
    def _decode(item, quoted=False):
        if item == MISSING_VALUE and not quoted:
            return None
        return unquote(item)

    def format(self):
        """
        Back to the attribute column syntax
        :return: str
        """
        groups = []
        for tag, values in self.items():
            if not values:
                groups.append(tag + '=')
                continue
            items = [
                MISSING_VALUE if x is None else quote(x, safe=' :/.-_~@!^|()[]')
                for x in values]
            groups.append('='.join((tag, VALUE_DELIMITER.join(items))))
        return ATTRIBUTE_DELIMITER.join(groups)


def _missing(value):
    return value == '' or value == MISSING_VALUE


def _frozen(header):
    if isinstance(header, MappingProxyType):
        return header
    return MappingProxyType(dict(header or {}))


def parse_line(line, header=None, line_num=None):
    """
    Make a Record of one GVF feature line
    :param line: str nine tab delimited columns
    :param header: dict pragmas, kept as a read only view
    :param line_num: int
    :return: Record
    """
    columns = [x.strip() for x in line.rstrip('\r\n').split(COLUMN_DELIMITER)]
    if len(columns) != 9:
        raise FormatError(
            "expected 9 columns, found {}: {}".format(len(columns), line.rstrip()))

    (seqid, source, so_type, start, end, score, strand, phase,
     attributes) = columns

    try:
        start = int(start)
        end = int(end)
        score = None if _missing(score) else float(score)
        phase = None if _missing(phase) else int(phase)
    except ValueError as err:
        raise FormatError("{}: {}".format(err, line.rstrip())) from err

    if start > end:
        raise FormatError("start {} is after end {}".format(start, end))

    if strand in UNKNOWN_STRANDS:
        strand = None
    elif strand not in STRANDS:
        raise FormatError("unknown strand '{}'".format(strand))

    return Record(
        seqid=None if _missing(seqid) else seqid,
        source=None if _missing(source) else source,
        type=None if _missing(so_type) else so_type,
        start=start,
        end=end,
        score=score,
        strand=strand,
        phase=phase,
        attributes=Attributes.parse(attributes),
        header=_frozen(header),
        line_num=line_num)


class GVF():
    """
    Genome Variation Format 1.10

    ### Pragmas:
    - Begin with '##', and contain meta-data (`##gvf-version 1.10`).
    - All of them come before the first feature line.

    ### Feature lines, nine tab-delimited columns:
    - seqid: The chromosome or contig of the sequence_alteration
    - source: The algorithm or database it came from
    - type: An SO term describing the type of sequence_alteration
    - start: 1-based start on the plus strand
    - end: 1-based end on the plus strand
    - score: A (Phred scaled) probability that the call is incorrect
    - strand: +/-
    - phase: for compatibility with GFF3 (.)
    - attributes: tag1=value1,value2;tag2=value1;
        (ID, Name, Variant_seq, Reference_seq, Dbxref, Start_range ...)

    A '.' anywhere means the value is missing.

    see https://github.com/The-Sequence-Ontology/Specifications/blob/master/gvf.md

    Iterating yields one Record per feature line, once; the stream
    is not rewound. Lines with format errors are logged and skipped,
    unless `strict`.
    """

    def __init__(self, stream=None, strict=False):
        self.stream = stream if stream is not None else sys.stdin
        self.strict = strict
        self.header = MappingProxyType({})
        self.line_num = 0
        self.format_errors = 0

    @classmethod
    @contextmanager
    def open(cls, path, strict=False):
        """
        :param path: str gvf file, may be gzipped (.gz)
        :param strict: boolean raise on format errors
        :return: GVF
        """
        if path.endswith('.gz'):
            stream = gzip.open(path, 'rt', encoding='utf-8')
        else:
            stream = open(path, encoding='utf-8')
        LOG.info("Reading GVF from %s", path)
        with stream:
            yield cls(stream, strict=strict)

    def __iter__(self):
        first_line = self._process_header()
        if first_line is not None:
            record = self._parse(first_line)
            if record is not None:
                yield record

        for line in self.stream:
            self.line_num += 1
            if line.strip() == '' or line.startswith(COMMENT):
                continue
            record = self._parse(line)
            if record is not None:
                yield record

    def _process_header(self):
        """
        Read pragmas until the first feature line,
        then make `self.header` a read only view of them
        :return: str the first feature line, None at end of stream
        """
        pragmas = {}
        first_line = self._read_pragmas(pragmas)
        self.header = MappingProxyType(pragmas)
        return first_line

    def _read_pragmas(self, pragmas):
        for line in self.stream:
            self.line_num += 1
            if line.strip() == '':
                continue
            if not line.startswith(COMMENT):
                return line
            if not line.startswith(PRAGMA):
                continue

            # ##genome-build NCBI GRCh38.p12
            parts = line.lstrip('#').split(None, 1)
            if not parts:
                continue
            key = parts[0].rstrip(':')
            if key != '':
                pragmas[key] = parts[1].strip() if len(parts) > 1 else ''
        return None

    def _parse(self, line):
        try:
            return parse_line(line, self.header, self.line_num)
        except FormatError as err:
            if self.strict:
                raise
            self.format_errors += 1
            LOG.warning("Skipping malformed line %i: %s", self.line_num, err)
        except Exception as err:
            raise ConversionError(
                self.line_num, "{}: {}".format(type(err).__name__, err)) from err
        return None
