# Camber calculation components
from .strand_geometry import (
    ActiveStrand, ActiveStrandSet, resolve, pattern_full_width, is_cut_width,
    casting_width,
)
from .elastic_modulus import ElasticModulusCalculator, elastic_modulus
from .prestress import PrestressForce, NO_PRESTRESS, force, combine
from .deflection import DeflectionComponents, deflections
from .time_dependent import TimeDependentResult, project
from .validator import validate
from .camber_engine import CamberEngine, calculate_camber
