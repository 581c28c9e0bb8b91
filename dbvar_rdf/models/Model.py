import logging
from dbvar_rdf.graph.Graph import Graph

LOG = logging.getLogger(__name__)
# note: currently no log issued


class Model():
    """
    Utility class to add common triples to a graph
    (type, label, subClassOf, seeAlso, typed values)
    """

    def __init__(self, graph):
        if isinstance(graph, Graph):
            self.graph = graph
            self.globaltt = self.graph.globaltt
            self.globaltcid = self.graph.globaltcid
        else:
            raise ValueError("{} is not a graph".format(graph))

    def addType(self, subject_id, subject_type):
        self.graph.addTriple(
            subject_id, self.globaltt['type'], subject_type)

    def addLabel(self, subject_id, label):
        self.graph.addTriple(
            subject_id, self.globaltt['label'], label, object_is_literal=True)

    def addClassToGraph(
            self, class_id, label=None, class_type=None, description=None
    ):
        """
        Any class added to the graph will get at least 2 triples:
        *(node, type, owl:Class) and
        *(node, label, literal(label))
        *if a type is added,
            then the node will be an rdfs:subClassOf that the type
        *if a description is provided,
            it will also get added as a dc:description
        :param class_id:
        :param label:
        :param class_type:
        :param description:
        :return:

        """
        if class_id is None:
            raise ValueError("class_id is None")

        self.graph.addTriple(
            class_id, self.globaltt['type'], self.globaltt['class'])
        if label is not None:
            self.addLabel(class_id, label)
        if class_type is not None:
            self.addSubClass(class_id, class_type)
        if description is not None:
            self.addDescription(class_id, description)

    def addSubClass(self, child_id, parent_id):
        self.graph.addTriple(child_id, self.globaltt['subclass_of'], parent_id)

    def addSeeAlso(self, subject_id, other_id):
        self.graph.addTriple(subject_id, self.globaltt['see also'], other_id)

    def addDescription(self, subject_id, description):
        self.graph.addTriple(
            subject_id, self.globaltt['description'], description.strip(),
            object_is_literal=True)

    def addDefinedBy(self, subject_id, ontology_id):
        self.graph.addTriple(
            subject_id, self.globaltt['is defined by'], ontology_id)

    def addOntologyDeclaration(self, ontology_id):
        self.graph.addTriple(
            ontology_id, self.globaltt['type'], self.globaltt['ontology'])

    def addValueNode(self, subject_id, node_id, node_type, value, literal_type):
        """
        Hang a typed node carrying a single value off the subject:
        subject has_attribute node
        node a node_type ; rdf:value value

        :param subject_id:
        :param node_id:
        :param node_type: curie of the node class
        :param value: the number the node holds
        :param literal_type: xsd curie for value
        :return: node_id
        """
        self.graph.addTriple(subject_id, self.globaltt['has attribute'], node_id)
        self.addType(node_id, node_type)
        self.graph.addTriple(
            node_id, self.globaltt['value'], value, object_is_literal=True,
            literal_type=literal_type)
        return node_id
