import argparse
import gzip
import logging
import sys
from contextlib import contextmanager

from dbvar_rdf import __version__, config
from dbvar_rdf.exceptions import DbVarRDFError
from dbvar_rdf.graph.StreamedGraph import StreamedGraph
from dbvar_rdf.models.Ontology import build_ontology
from dbvar_rdf.models.Variant import MODELS
from dbvar_rdf.sources.DbVar import DbVar
from dbvar_rdf.sources.GVF import GVF

LOG = logging.getLogger(__name__)

PROG_NAME = 'dbvar-rdf'

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ERROR = 99


class ArgumentParser(argparse.ArgumentParser):
    """
    argparse exits with 2 on bad arguments, we exit with 1
    """

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, "{}: error: {}\n".format(self.prog, message))


def get_parser():
    parser = ArgumentParser(
        prog=PROG_NAME,
        description='RDF converter for dbVar: GVF in, turtle out',
        formatter_class=argparse.RawTextHelpFormatter)
    parser.add_argument(
        '-v', '--version', action='version',
        version='%(prog)s {}'.format(__version__))
    parser.add_argument(
        '-c', '--config', type=str, help='yaml file overriding the defaults')
    parser.add_argument(
        '-q', '--quiet', help='turn off info logging', action="store_true")
    parser.add_argument(
        '--debug', help='turn on debug logging', action="store_true")

    commands = parser.add_subparsers(dest='command', metavar='command')
    commands.required = True

    convert = commands.add_parser(
        'convert', help='convert dbVar GVF to turtle',
        formatter_class=argparse.RawTextHelpFormatter)
    convert.add_argument(
        'model', nargs='?', choices=sorted(MODELS),
        help='what the GVF lines are (default from config: variant_call)')
    convert.add_argument(
        '-i', '--input', type=str,
        help='GVF file, may be gzipped (.gz)\nreads stdin when omitted')
    convert.add_argument(
        '-o', '--output', type=str,
        help='turtle file\nwrites stdout when omitted')
    convert.add_argument(
        '-z', '--compress', action='store_true', default=None,
        help='gzip the output')
    convert.add_argument(
        '-l', '--limit', type=int, help='limit number of records')
    convert.add_argument(
        '-t', '--taxon', type=str,
        help='curie of the organism, i.e. tax:9606 (default from config)')

    ontology = commands.add_parser(
        'ontology', help='write the dbVar ontology as turtle')
    ontology.add_argument(
        '-o', '--output', type=str, help='turtle file\nwrites stdout when omitted')

    return parser


@contextmanager
def open_writer(path=None, compress=False):
    """
    :param path: str output file, stdout when None
    :param compress: boolean gzip the output
    :return: StreamedGraph
    """
    if path is not None:
        with StreamedGraph.open(path, compress) as writer:
            yield writer
        return
    # stdout is left open; flush it even when conversion fails
    try:
        if compress:
            with gzip.GzipFile(fileobj=sys.stdout.buffer, mode='wb') as file_handle:
                yield StreamedGraph(file_handle)
        else:
            yield StreamedGraph(sys.stdout.buffer)
    finally:
        sys.stdout.buffer.flush()


@contextmanager
def open_reader(path=None):
    if path is not None:
        with GVF.open(path) as reader:
            yield reader
    else:
        yield GVF(sys.stdin)


def convert(args, conf):
    model = args.model if args.model is not None else conf['model']
    taxon = args.taxon if args.taxon is not None else conf['taxon']
    compress = args.compress if args.compress is not None else conf['compress']

    pipeline = DbVar(model, taxon=taxon)
    with open_reader(args.input) as reader, \
            open_writer(args.output, compress) as writer:
        pipeline.convert(reader, writer, args.limit)
    return EXIT_OK


def ontology(args, conf):
    with open_writer(args.output) as writer:
        writer.append(build_ontology())
    return EXIT_OK


COMMANDS = {
    'convert': convert,
    'ontology': ontology,
}


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        if args.debug:
            logging.basicConfig(level=logging.DEBUG)
        else:
            logging.basicConfig(level=logging.INFO)

    try:
        if args.config is not None:
            config.load(args.config)
        return COMMANDS[args.command](args, config.get_config())
    except DbVarRDFError as err:
        LOG.error("%s", err)
        LOG.debug("Conversion failed", exc_info=True)
        return EXIT_ERROR
    except Exception as err:
        LOG.exception("Unexpected error: %s", err)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
