"""
Pass prediction for an observer from sampled platform positions.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import requests

from .client import IssClient
from .config import PredictionConfig
from .models import Observer, Pass
from .passes import find_passes
from .sampling import prediction_timestamps
from .sunlight import with_estimated_illumination

logger = logging.getLogger(__name__)


class PassPredictor:
    """
    Predicts visible passes of a tracked platform.

    Samples the platform over the configured horizon, fills in missing
    illumination from solar geometry and runs the pass detector.
    """

    def __init__(self, client: Optional[IssClient] = None, config: Optional[PredictionConfig] = None) -> None:
        self.client = client or IssClient()
        self.config = config or PredictionConfig()

    def predict(self, observer: Observer, now: Optional[datetime] = None) -> List[Pass]:
        """
        Predict passes starting at ``now``.

        Feed failures are logged and produce an empty list.

        Args:
            observer: Ground observer
            now: Start of the horizon (default: current UTC time)

        Returns:
            List of Pass objects in chronological order
        """
        start = now or datetime.now(timezone.utc)
        timestamps = prediction_timestamps(
            start, self.config.horizon_hours, self.config.step_seconds
        )

        logger.info(
            f"Predicting passes over {observer.location} from {start} "
            f"({len(timestamps)} samples every {self.config.step_seconds}s)"
        )

        try:
            positions = self.client.positions(timestamps)
        except requests.RequestException as e:
            logger.warning(f"Could not fetch platform positions: {e}")
            return []
        except ValueError as e:
            logger.warning(f"Platform position feed returned unusable data: {e}")
            return []

        if self.config.estimate_illumination:
            positions = [with_estimated_illumination(p) for p in positions]

        return find_passes(observer, positions, self.config.visibility)
