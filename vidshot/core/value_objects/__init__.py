from vidshot.core.value_objects.sampling import SamplingMode, SamplingParams
from vidshot.core.value_objects.sampling_plan import SamplingPlan

__all__ = ["SamplingMode", "SamplingParams", "SamplingPlan"]
