from unittest.mock import MagicMock


def article(url, title="Some title", **extra):
    data = {
        "source": {"id": "bbc-news", "name": "BBC News"},
        "author": "Jane Reporter",
        "title": title,
        "description": "A description.",
        "url": url,
        "urlToImage": "https://img.example.com/a.jpg",
        "publishedAt": "2025-07-17T14:30:00Z",
        "content": "Full content.",
    }
    data.update(extra)
    return data


def page(*articles, total=None, status="ok"):
    return {
        "status": status,
        "totalResults": len(articles) if total is None else total,
        "articles": list(articles),
    }


def http_response(body=None, status_code=200, reason="OK"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    resp.ok = 200 <= status_code < 400
    resp.text = str(body)
    resp.json.return_value = body
    return resp


