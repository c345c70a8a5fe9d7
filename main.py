# main.py
import logging
import asyncio
from datetime import datetime
from typing import Optional

from services.firestore import FirestoreService
from services.trend_predictor import TrendPredictor, utc_now
from models.user import UserInDB
from models.prediction_summary import PredictionSummary
from utils.prediction_formatter import format_weight, summarize_prediction

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


async def process_user(
    fs: FirestoreService, user: UserInDB, predictor: TrendPredictor, now: datetime
) -> Optional[PredictionSummary]:
    logging.info(f"--- Processing user: {user.uid} ({user.email}) ---")

    profile = user.profile
    if not profile or profile.goal_weight_kg is None:
        logging.warning(f"User {user.uid} has no goal weight set. Skipping.")
        return None

    history = await fs.get_weight_history(user.uid)
    if history:
        current_weight = history[-1].weight_kg
    elif profile.weight_kg is not None:
        current_weight = profile.weight_kg
    else:
        current_weight = 0.0

    logging.info(f"Predicting from {len(history)} weight log(s).")
    result = predictor.predict(history, profile.goal_weight_kg, now=now)
    summary = summarize_prediction(result, current_weight, profile.goal_weight_kg)

    if not summary.has_enough_data:
        logging.info(f"Not enough weight logs for user {user.uid} to predict a trend.")
        return summary

    logging.info(
        f"{summary.trend_label}: {summary.weekly_change_kg:+.2f} kg/week, "
        f"{format_weight(summary.predicted_weight_30_days)} in 30 days."
    )
    if summary.projected_date_label:
        logging.info(
            f"Goal of {format_weight(summary.goal_weight_kg)} projected in "
            f"{summary.days_to_goal} days ({summary.projected_date_label})."
        )
    return summary


async def run_prediction_job(
    fs: Optional[FirestoreService] = None, now: Optional[datetime] = None
) -> int:
    logging.info("Starting weight trend prediction job.")
    firestore_service = fs or FirestoreService()
    predictor = TrendPredictor()
    run_at = now or utc_now()
    user_count = 0
    async for user in firestore_service.get_all_users():
        user_count += 1
        try:
            await process_user(firestore_service, user, predictor, run_at)
        except Exception as e:
            logging.error(
                f"An unexpected error occurred while processing user {user.uid}: {e}",
                exc_info=True,
            )
    logging.info(f"Processed a total of {user_count} user(s).")
    logging.info("Weight trend prediction job finished.")
    return user_count


if __name__ == "__main__":
    asyncio.run(run_prediction_job())
