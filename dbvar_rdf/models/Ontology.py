import logging

from dbvar_rdf.graph.RDFGraph import RDFGraph
from dbvar_rdf.models.Model import Model

LOG = logging.getLogger(__name__)

TITLE = 'dbVar ontology'
DESCRIPTION = 'Classes and properties used in the RDF version of NCBI dbVar'

IMPORTS = (
    'http://purl.org/dc/terms/',
    'http://biohackathon.org/resource/faldo',
    'http://purl.obolibrary.org/obo/',
    'http://med2rdf.org/ontology/med2rdf',
)

# label, parent class label (or None), description
CLASSES = (
    ('VariantCall', 'Variation', 'A variant call submitted to dbVar'),
    ('VariantRegion', 'Variation',
     'A region of the genome asserted to have structural variation'),
    ('Frequency', None, 'Allele frequency of a variant'),
    ('AlleleCount', None, 'Number of observed alternative alleles'),
    ('AlleleTotal', None, 'Total number of alleles in called genotypes'),
)

# translation table label, rdfs:label
DATATYPE_PROPERTIES = (
    ('clinical_significance', 'clinical significance'),
    ('phenotype (dbvar)', 'phenotype'),
    ('zygosity (dbvar)', 'zygosity'),
)


def build_ontology():
    """
    The dbVar ontology, as one graph
    :return: RDFGraph
    """
    graph = RDFGraph()
    model = Model(graph)
    globaltt = graph.globaltt
    ontology_id = globaltt['dbVar ontology']

    model.addOntologyDeclaration(ontology_id)
    graph.addTriple(
        ontology_id, globaltt['title'], TITLE, object_is_literal=True)
    model.addDescription(ontology_id, DESCRIPTION)
    for iri in IMPORTS:
        graph.addTriple(ontology_id, globaltt['imports'], iri)

    for label, parent, description in CLASSES:
        class_id = globaltt[label]
        model.addClassToGraph(
            class_id, label,
            None if parent is None else globaltt[parent], description)
        model.addDefinedBy(class_id, ontology_id)

    for term, label in DATATYPE_PROPERTIES:
        property_id = globaltt[term]
        model.addType(property_id, globaltt['datatype property'])
        model.addLabel(property_id, label)
        graph.addTriple(property_id, globaltt['domain'], globaltt['VariantCall'])
        graph.addTriple(property_id, globaltt['range'], globaltt['string'])
        model.addDefinedBy(property_id, ontology_id)

    LOG.info("Built the dbVar ontology with %i statements", len(graph))
    return graph
