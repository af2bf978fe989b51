"""
Cluster Classifier

Each symptom's score is split evenly across the clusters it maps to;
unmapped symptoms go to the metabolic/nutritional catch-all. The dominant
clusters are the smallest high-scoring prefix covering 60% of the total.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

from ..medical_data.cluster_map import ClusterTag, SYMPTOM_CLUSTER_MAP, DEFAULT_CLUSTER
from .symptom_normalizer import fuzzy_lookup, get_symptom_score

logger = logging.getLogger(__name__)

DOMINANT_COVERAGE = 0.6


@dataclass(frozen=True)
class ClusterScore:
    cluster: ClusterTag
    score: float


def clusters_for_symptom(symptom: str) -> List[ClusterTag]:
    match = fuzzy_lookup(symptom, SYMPTOM_CLUSTER_MAP)
    return list(match[1]) if match else [DEFAULT_CLUSTER]


def classify_clusters(symptoms: List[str]) -> List[ClusterScore]:
    """
    Score every cluster for the reported symptoms.

    Returns:
        All clusters, sorted by descending score (ties in enum order)
    """
    scores: Dict[ClusterTag, float] = {tag: 0.0 for tag in ClusterTag}

    for symptom in symptoms:
        clusters = clusters_for_symptom(symptom)
        share = get_symptom_score(symptom) / len(clusters)
        for cluster in clusters:
            scores[cluster] += share

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [ClusterScore(cluster=c, score=s) for c, s in ranked]


def dominant_clusters(cluster_scores: List[ClusterScore]) -> List[ClusterTag]:
    """Smallest prefix of positive clusters reaching 60% of the total score."""
    total = sum(c.score for c in cluster_scores)
    if total <= 0:
        return [DEFAULT_CLUSTER]

    dominant = []
    cumulative = 0.0
    for entry in cluster_scores:
        if entry.score <= 0:
            continue
        dominant.append(entry.cluster)
        cumulative += entry.score
        if cumulative >= total * DOMINANT_COVERAGE:
            break

    logger.debug(f"Dominant clusters: {[c.value for c in dominant]}")
    return dominant
