"""
Notes API — Documentation Service
===================================

What:  Maintains README.md and renders it for the "/" documentation page.
Why:   The API documents itself: curl users get the Markdown source, browsers
       get the same content rendered as HTML.
How:   README.md is written from a template on startup if it is missing;
       python-markdown renders it with the tables and fenced_code extensions.
Who:   Called by main.py (startup) and routes/docs.py (GET /).
"""

import logging
from pathlib import Path
from typing import Optional, Union

import aiofiles
import markdown as md

from notes_api.config import settings

logger = logging.getLogger(__name__)

# Relative to the service's working directory
README_FILE = "README.md"

README_TEMPLATE = """\
# Notes API

A simple RESTful API for managing notes built with Python and FastAPI.

## Features

- Create, read, update, and delete notes
- Persistent storage using JSON file
- RESTful API design
- Error handling
- API documentation

## API Endpoints

| Method | Endpoint     | Description         |
|--------|--------------|---------------------|
| GET    | /            | API documentation   |
| GET    | /notes       | Get all notes       |
| GET    | /notes/:id   | Get a note by ID    |
| POST   | /notes       | Create a new note   |
| PATCH  | /notes/:id   | Update a note by ID |
| DELETE | /notes/:id   | Delete a note by ID |
| GET    | /health      | Service health      |

## API Usage Examples

### Get all notes

```bash
curl -X GET http://localhost:{port}/notes
```

### Get a note by ID

```bash
curl -X GET http://localhost:{port}/notes/YOUR_NOTE_ID
```

### Create a new note

```bash
curl -X POST http://localhost:{port}/notes \\
  -H "Content-Type: application/json" \\
  -d '{{"note_title": "Task List", "note_body": "Complete project documentation"}}'
```

### Update a note

```bash
curl -X PATCH http://localhost:{port}/notes/YOUR_NOTE_ID \\
  -H "Content-Type: application/json" \\
  -d '{{"note_body": "Updated content"}}'
```

### Delete a note

```bash
curl -X DELETE http://localhost:{port}/notes/YOUR_NOTE_ID
```
"""

PAGE_TEMPLATE = """\
<html>
    <head>
        <meta charset="utf-8"/>
        <title>Notes API Documentation</title>
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; padding: 20px; color: #333; max-width: 800px; margin: 0 auto; }}
            h1 {{ color: #2c3e50; }}
            h2 {{ color: #3498db; margin-top: 30px; }}
            code {{ background: #f4f4f4; padding: 2px 5px; border-radius: 3px; }}
            pre {{ background: #f4f4f4; padding: 15px; border-radius: 5px; overflow-x: auto; }}
            table {{ border-collapse: collapse; width: 100%; }}
            th, td {{ text-align: left; padding: 12px; border-bottom: 1px solid #ddd; }}
            th {{ background-color: #f2f2f2; }}
        </style>
    </head>
    <body>
        {body}
    </body>
</html>
"""


class DocsService:
    """Creates and renders the README-backed documentation page."""

    def __init__(self, path: Union[str, Path, None] = None, port: Optional[int] = None):
        self.path = Path(path or README_FILE)
        self.port = port

    def _port(self) -> int:
        if self.port is not None:
            return self.port
        return settings.port

    async def ensure_readme(self) -> None:
        """Write README.md from the template if it does not exist yet."""
        if self.path.exists():
            return
        content = README_TEMPLATE.format(port=self._port())
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(content)
        logger.info("Created %s", self.path.resolve())

    async def read_markdown(self) -> str:
        """Return the README source, creating it first if needed."""
        await self.ensure_readme()
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            return await f.read()

    @staticmethod
    def render_page(text: str) -> str:
        """Render Markdown into the full HTML documentation page."""
        rendered = md.markdown(text, extensions=["fenced_code", "tables"])
        return PAGE_TEMPLATE.format(body=rendered)


docs_service = DocsService()
