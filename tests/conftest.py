"""Pytest fixtures for ePaper Distiller tests."""

import pytest


def link_record(article_id="", page_index=0):
    """A prev/next link as delivered by the ePaper API."""
    if not article_id:
        return {"id": None, "paper": None}
    return {
        "id": article_id,
        "paper": {
            "paper": "az-d",
            "date": "20200821",
            "title": "Dürener Zeitung",
            "page": {"id": f"20200821-{page_index}", "index": page_index},
        },
    }


@pytest.fixture
def sample_issue_record():
    """Sample issue record for a three-page issue."""
    return {
        "paper": "az-d",
        "title": "Dürener Zeitung",
        "date": 20200821,
        "brand": "az",
        "numberOfPages": 3,
        "pageTitles": ["Titelseite", "Lokales", "Sport"],
        "subscription": True,
        "bought": False,
        "version": 4,
    }


@pytest.fixture
def sample_picture_record():
    """Sample picture record."""
    return {
        "id": "pic-1",
        "type": "picture",
        "description": "<p>Der neue Marktplatz</p>",
        "xStart": 10,
        "xEnd": 522,
        "yStart": 20,
        "yEnd": 404,
        "width": 512,
        "height": 384,
    }


@pytest.fixture
def sample_article_record(sample_picture_record):
    """Sample article record as returned by the ePaper API."""
    return {
        "id": "a-1",
        "type": "article",
        "title": "Neuer Marktplatz eröffnet",
        "author": "Von Anna Beispiel",
        "underline": "Nach zwei Jahren Bauzeit",
        "headline": "",
        "location": "Düren",
        "pictures": [sample_picture_record],
        "paper": {
            "paper": "az-d",
            "date": "20200821",
            "title": "Dürener Zeitung",
            "page": {"id": "20200821-1", "index": 1, "number": 13, "title": "Lokales"},
        },
        "text": (
            '<p><b class="ortsmarke">Düren</b> Der Marktplatz ist fertig.<br>'
            'Mehr auf <a href="https://example.com" target="_blank">der Website</a>.</p>'
        ),
        "sociallink": "https://example.com/a-1",
        "print": "",
        "wordcount": 120,
        "prev": link_record(),
        "next": link_record("a-2", 1),
        "xStart": 0,
        "xEnd": 1024,
        "yStart": 0,
        "yEnd": 700,
    }


@pytest.fixture
def sample_page_record():
    """Sample page record with two articles, an ad and a loose picture."""
    return {
        "id": "20200821-1",
        "title": "Lokales",
        "number": 13,
        "index": 1,
        "width": 2048,
        "height": 2900,
        "free": False,
        "elements": [
            {"id": "ad-1", "type": "ad"},
            {"id": "a-2", "type": "article", "title": "Zweiter Artikel"},
            {"id": "a-1", "type": "article", "title": "Neuer Marktplatz eröffnet"},
            {"id": "pic-9", "type": "picture"},
        ],
    }


@pytest.fixture
def sample_site_script():
    """Excerpt of the ePaper web application script."""
    return (
        'var x={editions:[{paper:"az-d",title:"Dürener Zeitung",brand:"az"},'
        '{paper:"an-a",title:"Aachener Nachrichten",brand:"an"}]};'
        "impressum:'<h1>Impressum</h1><p>Zeitungsverlag Aachen GmbH<br>"
        "Dresdener Straße 3\\n52068 Aachen</p>')"
    )
