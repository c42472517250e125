"""
demo.py – One-shot showcase of contentmodel against SQLite (or whatever
$CONTENTMODEL_DATABASE_URL points at).
"""

from pprint import pprint

from contentmodel import ContentModel, init_contentmodel, on

# ────────────────────────────────── 1. Store ───────────────────────────────────────────
store = init_contentmodel()


# ────────────────────────────────── 2. Concrete model ──────────────────────────────────
class Story(ContentModel):
    def headline(self) -> str:
        return f"{self.get('title')} ({self.get('status', 'draft')})"


@on.create(Story)
def log_new_story(story: Story):
    print(f"\n🆕 New story created: {story.uuid}")


@on.update(Story)
def log_updated_story(story: Story):
    print(f"\n✏️  Story updated: {story.headline()}")


# ────────────────────────────────── 3. Walk the lifecycle ──────────────────────────────
def main():
    s = Story.get_new(store=store)
    s["title"] = "The Content Tale"
    s.save()

    Story.create({"title": "Second", "status": "published"}, store=store)
    s.update({"status": "published"})

    published = Story.findAllByStatus("published", store=store)
    print(f"\n{len(published)} published stories:")
    for story in published:
        print(f"  {story}")

    first = Story.findFirstByTitleAndStatus("Second", "published", store=store)
    pprint(first.get_values(), width=80)

    s.delete()
    print(f"\nDeleted, exists={s.exists}")


if __name__ == "__main__":
    main()
