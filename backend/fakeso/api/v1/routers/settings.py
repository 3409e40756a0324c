from fastapi import APIRouter, Depends, HTTPException, status

from fakeso.api.v1.deps import require_self
from fakeso.models.user import SETTINGS_FIELDS
from fakeso.schemas.settings import SettingsIn, SettingValueIn
from fakeso.schemas.user import user_out
from fakeso.services import accounts

router = APIRouter(prefix="/users/{username}/settings", tags=["settings"])


@router.put("", dependencies=[Depends(require_self)])
async def update_settings(username: str, body: SettingsIn):
    """
    Change several display settings in one request.
    Fields omitted (or null) in `settings` keep their current value.
    """
    values = body.settings.model_dump(exclude_none=True)
    result = await accounts.change_settings(username, values)
    return result.to_response(user_out)


@router.patch("/{field}", dependencies=[Depends(require_self)])
async def update_setting(username: str, field: str, body: SettingValueIn):
    """
    Change one display setting.

    Args:
        field: settings field name (theme, textSize, textBoldness, font,
            lineSpacing, backgroundColor, textColor, buttonColor)

    Raises:
        HTTPException (404): unknown settings field (UNKNOWN_SETTING)
    """
    if field not in SETTINGS_FIELDS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="UNKNOWN_SETTING")
    result = await accounts.change_setting(username, field, body.value)
    return result.to_response(user_out)
