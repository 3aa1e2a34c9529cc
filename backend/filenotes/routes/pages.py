"""
FileNotes: Upload Form Page
==============================

What:  GET / serves a static HTML form that posts to /write.
Why:   Lets a person create a note from a browser without any client tooling.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["Pages"])

WRITE_FORM_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>FileNotes</title>
</head>
<body>
  <h1>New note</h1>
  <form action="/write" method="post" enctype="application/x-www-form-urlencoded">
    <p><label>Name <input type="text" name="note_name" required></label></p>
    <p><label>Text<br><textarea name="note" rows="12" cols="60"></textarea></label></p>
    <p><button type="submit">Save</button></p>
  </form>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, summary="Note upload form")
async def write_form() -> HTMLResponse:
    return HTMLResponse(WRITE_FORM_HTML)
