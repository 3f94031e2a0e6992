import json
import logging
import secrets
import sqlite3
from datetime import datetime

logger = logging.getLogger(__name__)

SEED_TEMPLATES = [
    {
        "title": "Blog Post Writer",
        "description": "Create engaging blog posts with proper structure, SEO optimization, and compelling content.",
        "category": "writing",
        "goal": "Write an engaging, SEO-optimized blog post with a clear structure",
        "context": "Include an attention-grabbing introduction, descriptive subheadings and a strong conclusion.",
        "output_type": "text",
        "tags": ["SEO", "Content", "Blog"],
        "featured": True,
    },
    {
        "title": "Python Code Generator",
        "description": "Generate clean, documented Python code for data analysis, web development, and automation.",
        "category": "coding",
        "goal": "Generate clean, well-documented Python code",
        "context": "Follow PEP 8, include docstrings and handle errors explicitly.",
        "output_type": "code",
        "tags": ["Python", "Programming", "Documentation"],
        "featured": True,
    },
    {
        "title": "Product Description",
        "description": "Write compelling product descriptions that convert visitors into customers.",
        "category": "marketing",
        "goal": "Write a compelling product description that converts visitors into customers",
        "context": "",
        "output_type": "marketing",
        "tags": ["E-commerce", "Sales", "Conversion"],
        "featured": False,
    },
    {
        "title": "Research Summary",
        "description": "Summarize complex research papers and academic content into digestible insights.",
        "category": "research",
        "goal": "Summarize a research paper into key findings and practical insights",
        "context": "",
        "output_type": "analysis",
        "tags": ["Academic", "Analysis", "Summary"],
        "featured": False,
    },
    {
        "title": "Email Campaign",
        "description": "Design effective email campaigns with subject lines, body content, and CTAs.",
        "category": "marketing",
        "goal": "Design an email campaign with subject lines, body content and calls to action",
        "context": "",
        "output_type": "email",
        "tags": ["Email", "Campaign", "CTA"],
        "featured": False,
    },
    {
        "title": "AI Art Prompt",
        "description": "Create detailed prompts for AI image generators like DALL-E, Midjourney, and Stable Diffusion.",
        "category": "image",
        "goal": "Create a detailed prompt for an AI image generator",
        "context": "Describe subject, style, lighting, composition and mood.",
        "output_type": "creative",
        "tags": ["Art", "Image", "Creative"],
        "featured": True,
    },
]


class PromptStore:
    """Saved prompts and prompt templates in a sqlite file"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.init_db()

    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        conn = self._connect()
        c = conn.cursor()
        c.execute('''CREATE TABLE IF NOT EXISTS prompts
                     (id TEXT PRIMARY KEY, title TEXT, content TEXT, prompt_type TEXT,
                      created_at TEXT, updated_at TEXT)''')
        c.execute('''CREATE TABLE IF NOT EXISTS templates
                     (id TEXT PRIMARY KEY, title TEXT, description TEXT, category TEXT,
                      goal TEXT, context TEXT, output_type TEXT, tags TEXT,
                      featured BOOLEAN, uses INTEGER DEFAULT 0, created_at TEXT)''')
        c.execute("SELECT COUNT(*) FROM templates")
        if c.fetchone()[0] == 0:
            now = datetime.utcnow().isoformat()
            for t in SEED_TEMPLATES:
                c.execute("INSERT INTO templates VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?)",
                          (secrets.token_hex(8), t["title"], t["description"], t["category"],
                           t["goal"], t["context"], t["output_type"], json.dumps(t["tags"]),
                           t["featured"], now))
            logger.info("Seeded %d prompt templates", len(SEED_TEMPLATES))
        conn.commit()
        conn.close()

    # ==================== SAVED PROMPTS ====================

    def save_prompt(self, title: str, content: str, prompt_type: str = "wizard") -> dict:
        now = datetime.utcnow().isoformat()
        prompt = {
            "id": secrets.token_hex(8),
            "title": title,
            "content": content,
            "prompt_type": prompt_type,
            "created_at": now,
            "updated_at": now,
        }
        conn = self._connect()
        conn.execute("INSERT INTO prompts VALUES (:id, :title, :content, :prompt_type, :created_at, :updated_at)",
                     prompt)
        conn.commit()
        conn.close()
        return prompt

    def list_prompts(self, search: str = "") -> list:
        """Newest first, optionally filtered on title or content"""
        conn = self._connect()
        rows = conn.execute("SELECT * FROM prompts ORDER BY created_at DESC, rowid DESC").fetchall()
        conn.close()
        prompts = [dict(r) for r in rows]
        if search:
            needle = search.lower()
            prompts = [p for p in prompts if needle in p["title"].lower() or needle in p["content"].lower()]
        return prompts

    def get_prompt(self, prompt_id: str):
        conn = self._connect()
        row = conn.execute("SELECT * FROM prompts WHERE id = ?", (prompt_id,)).fetchone()
        conn.close()
        return dict(row) if row else None

    def update_prompt(self, prompt_id: str, title: str, content: str) -> bool:
        conn = self._connect()
        c = conn.cursor()
        c.execute("UPDATE prompts SET title = ?, content = ?, updated_at = ? WHERE id = ?",
                  (title, content, datetime.utcnow().isoformat(), prompt_id))
        conn.commit()
        conn.close()
        return c.rowcount > 0

    def delete_prompt(self, prompt_id: str) -> bool:
        conn = self._connect()
        c = conn.cursor()
        c.execute("DELETE FROM prompts WHERE id = ?", (prompt_id,))
        conn.commit()
        conn.close()
        return c.rowcount > 0

    # ==================== TEMPLATES ====================

    @staticmethod
    def _template(row) -> dict:
        template = dict(row)
        template["tags"] = json.loads(template["tags"] or "[]")
        template["featured"] = bool(template["featured"])
        return template

    def list_templates(self, category: str = "all", search: str = "") -> list:
        conn = self._connect()
        if category and category != "all":
            rows = conn.execute("SELECT * FROM templates WHERE category = ? ORDER BY featured DESC, title",
                                (category,)).fetchall()
        else:
            rows = conn.execute("SELECT * FROM templates ORDER BY featured DESC, title").fetchall()
        conn.close()
        templates = [self._template(r) for r in rows]
        if search:
            needle = search.lower()
            templates = [
                t for t in templates
                if needle in t["title"].lower()
                or needle in t["description"].lower()
                or any(needle in tag.lower() for tag in t["tags"])
            ]
        return templates

    def get_template(self, template_id: str):
        conn = self._connect()
        row = conn.execute("SELECT * FROM templates WHERE id = ?", (template_id,)).fetchone()
        conn.close()
        return self._template(row) if row else None

    def use_template(self, template_id: str):
        """Count a use and return the partial wizard state the template suggests"""
        template = self.get_template(template_id)
        if template is None:
            return None
        conn = self._connect()
        conn.execute("UPDATE templates SET uses = uses + 1 WHERE id = ?", (template_id,))
        conn.commit()
        conn.close()
        return prefill(template)


def prefill(template: dict) -> dict:
    values = {
        "goal": template.get("goal"),
        "context": template.get("context"),
        "outputType": template.get("output_type"),
    }
    return {k: v for k, v in values.items() if v}
