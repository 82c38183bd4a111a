from libraryhub.extensions import get_data_client
from libraryhub.models.profile import Profile

class ProfileRepo:
    @staticmethod
    def get_by_id(user_id: str):
        res = get_data_client().table("profiles").select("*").eq("id", user_id).single().execute()
        return Profile.from_row(res.data) if res.data else None

    @staticmethod
    def update(user_id: str, full_name: str, phone: str):
        # email is never written from here
        res = (
            get_data_client()
            .table("profiles")
            .update({"full_name": full_name, "phone": phone})
            .eq("id", user_id)
            .execute()
        )
        rows = res.data or []
        return Profile.from_row(rows[0]) if rows else None
