"""Value types for horses, genomes, skills and training sessions."""

from paddock.model.conformation import ConformationGenetics
from paddock.model.genetics import GenePair, StatGeneMap, StatName
from paddock.model.horse import Gender, Horse, ParentInfo
from paddock.model.mental import (
    Bond,
    HousingType,
    MentalState,
    Mood,
    Personality,
    Satisfaction,
    SatisfactionLevel,
)
from paddock.model.session import Trainer, TrainingResult, TrainingValidation
from paddock.model.skill import SkillCategory, SkillDefinition
from paddock.model.visual import VisualGenetics

__all__ = [
    "Bond",
    "ConformationGenetics",
    "GenePair",
    "Gender",
    "Horse",
    "HousingType",
    "MentalState",
    "Mood",
    "ParentInfo",
    "Personality",
    "Satisfaction",
    "SatisfactionLevel",
    "SkillCategory",
    "SkillDefinition",
    "StatGeneMap",
    "StatName",
    "Trainer",
    "TrainingResult",
    "TrainingValidation",
    "VisualGenetics",
]
