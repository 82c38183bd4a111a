from flask import current_app

from libraryhub.remote.errors import DataServiceError
from libraryhub.repositories.profile_repo import ProfileRepo

class ProfileService:
    @staticmethod
    def get_profile(user_id: str):
        try:
            return ProfileRepo.get_by_id(user_id)
        except DataServiceError as e:
            current_app.logger.warning(f"[ProfileService] profile fetch failed: {e}")
            return None

    @staticmethod
    def update_profile(user_id: str, full_name: str, phone: str):
        profile = ProfileRepo.update(user_id, full_name=full_name, phone=phone)
        current_app.logger.info(f"[ProfileService] user={user_id} profile updated")
        return profile
