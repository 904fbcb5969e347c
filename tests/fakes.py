"""In-memory stand-ins for the import pipeline's collaborators."""
import json

from recipebox.errors import FetchFailed
from recipebox.images import ImageStore


def recipe_page(node, extra_blocks=()):
    """Wrap a JSON-LD node in a minimal HTML page."""
    blocks = list(extra_blocks) + [json.dumps(node)]
    scripts = "\n".join(
        f'<script type="application/ld+json">{block}</script>' for block in blocks
    )
    return f"<html><head><title>t</title>{scripts}</head><body><p>hi</p></body></html>"


class FakeHtmlSource:
    def __init__(self, pages):
        self.pages = dict(pages)
        self.requested = []

    async def fetch(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise FetchFailed("HTTP 404")
        return self.pages[url]


class FakeImageFetcher:
    def __init__(self, images=None):
        self.images = dict(images or {})
        self.requested = []

    async def fetch(self, url):
        self.requested.append(url)
        if not url:
            return None
        return self.images.get(url)


class InMemoryStore:
    def __init__(self, image_dir):
        self.recipes = {}
        self.images = ImageStore(str(image_dir))

    def find_by_source_url(self, url):
        if not url:
            return None
        return next((r for r in self.recipes.values() if r.org_url == url), None)

    def find_by_name(self, name):
        return next((r for r in self.recipes.values() if r.name == name), None)

    def get(self, recipe_id):
        return self.recipes.get(recipe_id)

    def save(self, recipe):
        self.recipes[recipe.id] = recipe
        return recipe

    def delete(self, recipe_id):
        existed = self.recipes.pop(recipe_id, None) is not None
        self.images.delete(recipe_id)
        return existed

    def save_image(self, data, recipe_id):
        return self.images.save(data, recipe_id)

    def move_image(self, from_id, to_id):
        return self.images.move(from_id, to_id)

    def delete_image(self, recipe_id):
        self.images.delete(recipe_id)
