from ..storage import ResilientStorage
from ..core.security import ApiKeyCipher
from ..schemas import UserRecord, UserProfileUpdate
from ..exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for profile settings (preferred model, API key)"""
    
    def __init__(self, storage: ResilientStorage, cipher: ApiKeyCipher):
        self.storage = storage
        self.cipher = cipher
    
    def update_profile(self, user_id: str, profile_data: UserProfileUpdate) -> UserRecord:
        """Update the profile; API keys are stored encrypted, an empty key clears it"""
        logger.info(f"Updating profile for user {user_id}")
        
        updates = {}
        if profile_data.preferred_model is not None:
            updates["preferred_model"] = profile_data.preferred_model
        if "api_key" in profile_data.model_fields_set:
            api_key = (profile_data.api_key or "").strip()
            updates["api_key"] = self.cipher.encrypt(api_key) if api_key else None
        
        if not updates:
            user = self.storage.get_user(user_id)
            if not user:
                raise NotFoundError("User", user_id)
            return user
        
        user = self.storage.update_user_profile(user_id, updates)
        logger.info(f"Profile updated for user {user_id}: {sorted(updates)}")
        return user
