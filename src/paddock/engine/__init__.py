"""Simulation rules: breeding, satisfaction, mood, training, phenotype, day advance."""

from paddock.engine.breeding import (
    BreedingError,
    BreedingValidation,
    breed_conformation_genetics,
    breed_horses,
    breed_stat_genes,
    breed_visual_genetics,
    create_foundation_horse,
    generate_foundation_genes,
    generate_random_personality,
    inherit_personality,
    validate_breeding,
)
from paddock.engine.day import (
    DayAdvanceResult,
    advance_day,
    apply_training_result,
    change_housing,
    train_horse,
)
from paddock.engine.mood import (
    calculate_daily_mood,
    check_for_confusion,
    check_mood_transition,
    get_fatigue_modifier,
    get_mood_description,
    is_overworked,
    needs_rest_day,
    reduce_fatigue,
    update_fatigue,
)
from paddock.engine.phenotype import (
    calculate_overall_quality,
    calculate_overall_training,
    calculate_phenotype,
    get_age_modifier,
    get_strongest_stat,
    get_weakest_stat,
)
from paddock.engine.satisfaction import (
    add_satisfaction,
    are_satisfaction_needs_met,
    calculate_satisfaction_requirements,
    calculate_training_satisfaction,
    get_unmet_needs,
    reset_daily_satisfaction,
)
from paddock.engine.training import SessionBreakdown, apply_training, calculate_session_value

__all__ = [
    "BreedingError",
    "BreedingValidation",
    "DayAdvanceResult",
    "SessionBreakdown",
    "add_satisfaction",
    "advance_day",
    "apply_training",
    "apply_training_result",
    "are_satisfaction_needs_met",
    "breed_conformation_genetics",
    "breed_horses",
    "breed_stat_genes",
    "breed_visual_genetics",
    "calculate_daily_mood",
    "calculate_overall_quality",
    "calculate_overall_training",
    "calculate_phenotype",
    "calculate_satisfaction_requirements",
    "calculate_session_value",
    "calculate_training_satisfaction",
    "change_housing",
    "check_for_confusion",
    "check_mood_transition",
    "create_foundation_horse",
    "generate_foundation_genes",
    "generate_random_personality",
    "get_age_modifier",
    "get_fatigue_modifier",
    "get_mood_description",
    "get_strongest_stat",
    "get_unmet_needs",
    "get_weakest_stat",
    "inherit_personality",
    "is_overworked",
    "needs_rest_day",
    "reduce_fatigue",
    "reset_daily_satisfaction",
    "train_horse",
    "update_fatigue",
    "validate_breeding",
]
