"""
Explainability Engine

Explains ranked conditions via symptom contribution scoring.
Fully local - no SHAP, no LIME, no model calls.

Methods:
- Symptom contribution scores (relevance x symptom score)
- Template explanation used whenever no generated text is available
- Rule-based trace logs
"""

from typing import Dict, List, Any, Optional

from ..medical_data.disease_database import get_disease
from ..safety_config import DISCLAIMER
from .relevance_scorer import get_relevance
from .symptom_normalizer import get_symptom_score


class ExplainabilityEngine:
    """
    Explainability engine for symptom-condition likelihoods.

    Provides transparent explanations from the reference tables alone.
    """

    def symptom_contributions(
        self,
        condition_name: str,
        symptoms: List[str]
    ) -> Dict[str, float]:
        """
        Calculate how much each symptom contributes to a condition.

        Args:
            condition_name: Reference condition name
            symptoms: Reported symptoms

        Returns:
            Dict mapping matched symptom to relevance x symptom score
        """
        disease = get_disease(condition_name)
        if disease is None:
            return {}

        contributions = {}
        for symptom in symptoms:
            relevance = get_relevance(disease, symptom)
            if relevance > 0:
                contributions[symptom] = round(relevance * get_symptom_score(symptom), 4)
        return contributions

    def template_explanation(
        self,
        condition_name: str,
        matched_symptoms: List[str],
        likelihood: Optional[float] = None
    ) -> str:
        """Fixed-template explanation naming the first two matched symptoms."""
        if not matched_symptoms:
            return "This condition may be considered based on your reported symptoms."

        basis = " and ".join(matched_symptoms[:2])
        if len(matched_symptoms) > 2:
            basis += " and other symptoms"
        return f"This condition may be considered based on {basis}."

    def generate_explanation(
        self,
        condition_name: str,
        likelihood: float,
        symptoms: List[str]
    ) -> str:
        """
        Longer narrative: confidence, key factors, unreported hallmarks.

        Args:
            condition_name: Ranked condition
            likelihood: Normalized likelihood (0-1)
            symptoms: Reported symptoms

        Returns:
            Multi-line explanation string
        """
        contributions = self.symptom_contributions(condition_name, symptoms)
        sorted_symptoms = sorted(contributions.items(), key=lambda x: x[1], reverse=True)

        explanation_parts = [
            f"**{condition_name}** ({likelihood*100:.0f}% relative likelihood, "
            f"{self._confidence_level(likelihood)} confidence)"
        ]

        if sorted_symptoms:
            factors = []
            for symptom, score in sorted_symptoms[:3]:
                if score > 0.3:
                    strength = "strongly suggests"
                elif score > 0.1:
                    strength = "suggests"
                else:
                    strength = "may indicate"
                factors.append(f"'{symptom}' {strength} this condition")
            explanation_parts.append("Key factors: " + "; ".join(factors))

        missing = self._unreported_hallmarks(condition_name, symptoms)
        if missing:
            explanation_parts.append(
                f"Note: Common symptoms not reported: {', '.join(missing[:3])}"
            )

        return "\n".join(explanation_parts)

    def rule_trace(
        self,
        condition_name: str,
        symptoms: List[str]
    ) -> List[str]:
        """
        Rule-based trace of which reported symptoms support a condition.

        Returns:
            List of trace statements
        """
        disease = get_disease(condition_name)
        if disease is None:
            return []

        trace = []
        for symptom in symptoms:
            relevance = get_relevance(disease, symptom)
            if relevance > 0.7:
                trace.append(f"'{symptom}' is highly associated with {condition_name} (relevance: {relevance:.2f})")
            elif relevance > 0.4:
                trace.append(f"'{symptom}' is moderately associated with {condition_name} (relevance: {relevance:.2f})")
            elif relevance > 0:
                trace.append(f"'{symptom}' is weakly associated with {condition_name} (relevance: {relevance:.2f})")

        for symptom in self._unreported_hallmarks(condition_name, symptoms):
            trace.append(f"Key symptom '{symptom}' not reported for {condition_name}")

        return trace

    def generate_full_report(
        self,
        analysis: Dict[str, Any],
        symptoms: List[str],
        top_conditions: int = 3
    ) -> Dict[str, Any]:
        """
        Generate comprehensive explainability report.

        Args:
            analysis: AnalysisResult.to_dict() output
            symptoms: Reported symptoms
            top_conditions: Number of top conditions to explain

        Returns:
            Full explanation report
        """
        explanations = []
        for condition in analysis.get("conditions", [])[:top_conditions]:
            name = condition["condition"]
            likelihood = condition["likelihood"]
            explanations.append({
                "condition": name,
                "likelihood": likelihood,
                "confidence_level": self._confidence_level(likelihood),
                "contribution_scores": self.symptom_contributions(name, symptoms),
                "narrative": self.generate_explanation(name, likelihood, symptoms),
                "rule_trace": self.rule_trace(name, symptoms),
            })

        return {
            "observed_symptoms": symptoms,
            "top_conditions": explanations,
            "disclaimer": DISCLAIMER,
        }

    def _unreported_hallmarks(self, condition_name: str, symptoms: List[str]) -> List[str]:
        """High-relevance symptoms of a condition the user did not report."""
        disease = get_disease(condition_name)
        if disease is None:
            return []
        reported = {s.lower() for s in symptoms}
        return [
            s for s, w in disease.symptom_relevance.items()
            if w > 0.8 and s not in reported
        ]

    def _confidence_level(self, likelihood: float) -> str:
        """Convert likelihood to confidence level."""
        if likelihood > 0.7:
            return "high"
        elif likelihood > 0.4:
            return "moderate"
        elif likelihood > 0.2:
            return "low"
        else:
            return "very low"
