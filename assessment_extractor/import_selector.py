"""Import selector: decides which extracted sections are pre-selected for import"""
from typing import Dict, Mapping

from .config import PRESELECT_THRESHOLD
from .scorer import clamp, confidence_band


class ImportSelector:
    """Bands each section's confidence and pre-selects the trustworthy ones"""

    def __init__(self, threshold: float = PRESELECT_THRESHOLD):
        self.threshold = threshold

    def select(self, record: Mapping[str, object]) -> Dict[str, Dict[str, object]]:
        """
        Build the per-section import selection for a mapped record

        Args:
            record: ``DomainRecord.to_dict()`` output, or the failure sentinel

        Returns:
            Dictionary mapping section keys to {"confidence", "band", "preselected"};
            empty for a failed extraction
        """
        if not record or record.get("_extractionFailed"):
            return {}

        section_scores = (record.get("confidence") or {}).get("sections") or {}
        selection = {}

        for section, score in section_scores.items():
            confidence = clamp(float(score or 0.0))
            if confidence >= self.threshold:
                # Confident enough to merge without review
                preselected = True
            else:
                # Offered, but left for the user to opt in
                preselected = False

            selection[section] = {
                "confidence": confidence,
                "band": confidence_band(confidence),
                "preselected": preselected,
            }

        return selection
