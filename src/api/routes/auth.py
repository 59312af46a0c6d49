"""Login, logout and dashboard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from api.dependencies import SESSION_USER_KEY, get_session_user, require_user, templates
from core.credentials import Credentials, get_credentials

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def login_form(request: Request):
    if get_session_user(request):
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, "index.html", {})


@router.post("/login")
async def login(
    request: Request,
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    credentials: Credentials = Depends(get_credentials),
):
    """Check the credentials and start a session."""
    if username and credentials.verify(username, password):
        request.session[SESSION_USER_KEY] = username.strip().lower()
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)

    return templates.TemplateResponse(
        request,
        "message.html",
        {
            "title": "Falscher Benutzername oder Passwort",
            "lines": [],
            "back_url": "/",
            "back_label": "Zurück",
        },
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, username: str = Depends(require_user)):
    return templates.TemplateResponse(request, "dashboard.html", {"username": username})


@router.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
