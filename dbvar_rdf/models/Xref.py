import logging
import re
from collections import Counter, namedtuple

LOG = logging.getLogger(__name__)

# source:   the database label as written in the GVF (Dbxref=dbSNP:rs123)
# pattern:  regex searched in the raw id, group 1 is what gets linked
# template: str.format template for the curie or url linked to,
#           None to ignore the source without complaint
XrefRule = namedtuple('XrefRule', ['source', 'pattern', 'template'])

TRACE_TEMPLATE = \
    'https://www.ncbi.nlm.nih.gov/Traces/trace.cgi?cmd=retrieve&val=TEMPLATE_ID=%27{}%27'
CLINGEN_TEMPLATE = \
    'https://www.ncbi.nlm.nih.gov/projects/dbvar/clingen/clingen_region.cgi?id={}'
GENE_TEMPLATE = \
    'https://www.ncbi.nlm.nih.gov/sites/entrez?Db=gene&Cmd=DetailsSearch&Term={}[sym]+AND+txid9606[orgn]'
GENEREVIEWS_TEMPLATE = 'https://www.ncbi.nlm.nih.gov/books/{}'

# matched top to bottom, the first rule whose source and pattern match wins
CROSS_REFERENCE_RULES = (
    XrefRule('URL', None, None),
    XrefRule('CLONE', None, None),
    XrefRule('ClinVar', r'(SCV\d+)', 'clinvar:{}'),
    XrefRule('PubMed', r'(\d+)', 'pubmed:{}'),
    XrefRule('OMIM', r'(\d+)', 'omim:{}'),
    # RefSeq before any other GenBank accession
    XrefRule(
        'GENBANK',
        r'(((AC|AP|NC|NG|NM|NP|NR|NT|NW|XM|XP|XR|YP|ZP)_\d+|(NZ_[A-Z]{4}\d+))(\.\d+)?)',
        'refseq:{}'),
    XrefRule(
        'GENBANK',
        r'(([A-Z]\d{5}|[A-Z]{2}\d{6}|[A-Z]{4}\d{8}|[A-J][A-Z]{2}\d{5})(\.\d+)?)',
        'insdc:{}'),
    XrefRule('TRACE', r'TEMPLATE_ID=([A-Z0-9]+)', TRACE_TEMPLATE),
    XrefRule('dbSNP', r'(rs\d+)', 'dbsnp:{}'),
    XrefRule('ClinGen', r'([A-Z]+-\d+)', CLINGEN_TEMPLATE),
    XrefRule('GENE', r'([A-Za-z0-9\-_]+)', GENE_TEMPLATE),
    XrefRule('GeneReviews', r'(NBK\d+)', GENEREVIEWS_TEMPLATE),
    XrefRule('dbVar', r'([en]sv\d+)', 'dbvarv:{}'),
)

PHENOTYPE_RULES = (
    XrefRule('MeSH', r'([CD]\d{6})$', 'mesh:{}'),
    XrefRule('HP', r'(\d{7})$', 'hp:{}'),
    XrefRule('MedGen', r'([CN]*\d{4,7})$', 'medgen:{}'),
    XrefRule('Orphanet', r'(Orphanet[_:]C?\d+)', 'ordo:{}'),
    XrefRule('OMIM', r'(\d+)', 'omim:{}'),
    XrefRule('DO', r'(\d+)', 'doid:DOID:{}'),
    XrefRule('MONDO', r'(\d+)', 'obo:MONDO_{}'),
)


class XrefResolver():
    """
    Turn (source, raw id) pairs into something to link to,
    by an ordered table of XrefRules.

    Pairs no rule matches are dropped, not reported as errors;
    upstream data is messy. They are counted in `dropped` (per source)
    and passed to `on_drop(source, raw_id)` when given,
    so the drop rate can be watched without changing the output.
    """

    def __init__(self, rules, on_drop=None):
        self.rules = tuple(
            XrefRule(
                rule.source,
                None if rule.pattern is None else re.compile(rule.pattern),
                rule.template)
            for rule in rules)
        self.on_drop = on_drop
        self.dropped = Counter()
        self.suppressed = Counter()

    def resolve(self, source, raw_id):
        """
        :param source: str database label
        :param raw_id: str identifier as found in the GVF
        :return: curie or url, None if nothing matches
        """
        for rule in self.rules:
            if rule.source != source:
                continue
            if rule.template is None:
                self.suppressed[source] += 1
                return None
            if raw_id is None:
                break
            match = rule.pattern.search(raw_id)
            if match is not None:
                return rule.template.format(match.group(1))

        self.dropped[source] += 1
        LOG.debug("No link for %s:%s", source, raw_id)
        if self.on_drop is not None:
            self.on_drop(source, raw_id)
        return None
