from abc import ABCMeta, abstractmethod
import os

import yaml


class Graph(metaclass=ABCMeta):

    # global translation table, ontology label -> curie
    with open(
            os.path.join(
                os.path.dirname(__file__),
                '../translationtable/GLOBAL_TERMS.yaml')) as fhandle:
        globaltt = yaml.safe_load(fhandle)
        globaltcid = {v: k for k, v in globaltt.items()}

    @abstractmethod
    def addTriple(
            self,
            subject_id,
            predicate_id,
            object_id,
            object_is_literal=False,
            literal_type=None):
        pass

    @abstractmethod
    def serialize(self, **kwargs):
        pass
