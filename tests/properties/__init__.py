from properties.generators import (
    GeneratorConfig,
    SequenceGenerator,
    SimilarSequenceGenerator,
    BlankLineGenerator,
    EdgeCaseGenerator,
    generate_random_sequences,
    generate_similar_sequences,
    generate_edge_cases,
)


__all__ = [
    "GeneratorConfig",
    "SequenceGenerator",
    "SimilarSequenceGenerator",
    "BlankLineGenerator",
    "EdgeCaseGenerator",
    "generate_random_sequences",
    "generate_similar_sequences",
    "generate_edge_cases",
]
