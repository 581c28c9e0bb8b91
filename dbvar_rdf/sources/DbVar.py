import logging

from dbvar_rdf.exceptions import (
    ConversionError, FormatError, ValidationError)
from dbvar_rdf.models.Variant import VariantBuilder
from dbvar_rdf.models.Xref import (
    CROSS_REFERENCE_RULES, PHENOTYPE_RULES, XrefResolver)
from dbvar_rdf.utils.Mappings import Mappings

LOG = logging.getLogger(__name__)


class DbVar():
    """
    Convert the variants of a dbVar GVF dump into turtle, one record
    at a time: GVF reader -> VariantBuilder -> StreamedGraph.

    Lines the reader can not parse, and records missing a required
    field, are logged and skipped. Anything else going wrong
    (an ambiguous chromosome included) stops the run with a
    ConversionError that names the line.
    """

    def __init__(self, model='variant_call', mappings=None, taxon=None,
                 on_drop=None):
        self.model = model
        self.mappings = mappings if mappings is not None else Mappings.default()
        self.xrefs = XrefResolver(CROSS_REFERENCE_RULES, on_drop)
        self.phenotypes = XrefResolver(PHENOTYPE_RULES, on_drop)
        self.builder = VariantBuilder(
            model, self.mappings, self.xrefs, self.phenotypes, taxon)
        self.stats = None

    def convert(self, reader, writer, limit=None):
        """
        :param reader: sources.GVF.GVF
        :param writer: graph.StreamedGraph
        :param limit: int stop after this many records
        :return: dict run statistics
        """
        stats = {
            'records': 0,
            'statements': 0,
            'bytes': 0,
            'format_errors': 0,
            'validation_errors': 0,
            'dropped_xrefs': 0,
            'dropped_phenotypes': 0,
        }
        self.stats = stats

        LOG.info("Converting GVF records as %s", self.model)
        for record in reader:
            if limit is not None and stats['records'] >= limit:
                LOG.info("Stopping at the limit of %i records", limit)
                break
            stats['records'] += 1

            try:
                graph = self.builder.build(record)
                stats['bytes'] += writer.append(graph)
            except FormatError as err:
                stats['format_errors'] += 1
                LOG.warning(
                    "Skipping malformed record at line %i: %s",
                    record.line_num, err)
                continue
            except ValidationError as err:
                stats['validation_errors'] += 1
                LOG.warning(
                    "Skipping invalid record at line %i: %s",
                    record.line_num, err)
                continue
            except Exception as err:
                raise ConversionError(
                    record.line_num,
                    "{}: {}".format(type(err).__name__, err)) from err

            stats['statements'] += 1

        stats['format_errors'] += getattr(reader, 'format_errors', 0)
        stats['dropped_xrefs'] = sum(self.xrefs.dropped.values())
        stats['dropped_phenotypes'] = sum(self.phenotypes.dropped.values())

        LOG.info(
            "Converted %i of %i records (%i bytes); skipped %i malformed "
            "and %i invalid; %i cross references and %i phenotypes "
            "had no link",
            stats['statements'], stats['records'], stats['bytes'],
            stats['format_errors'], stats['validation_errors'],
            stats['dropped_xrefs'], stats['dropped_phenotypes'])
        if self.xrefs.dropped:
            LOG.debug("Unlinked cross references: %s", dict(self.xrefs.dropped))
        if self.phenotypes.dropped:
            LOG.debug("Unlinked phenotypes: %s", dict(self.phenotypes.dropped))

        return stats
