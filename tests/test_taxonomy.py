import json
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.skill_matcher import match_skills  # noqa: E402
from app.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_bundled_catalog(self):
        taxonomy = LocalTaxonomy()
        self.assertIn("c++", taxonomy.known_skills())
        self.assertEqual(len(taxonomy.role_names()), 10)
        self.assertEqual(taxonomy.role_names()[0], "frontend developer")

    def test_role_lookup_is_case_insensitive_and_exact(self):
        taxonomy = LocalTaxonomy()
        self.assertIn("react", taxonomy.role_skills("  Frontend DEVELOPER "))
        self.assertIsNone(taxonomy.role_skills("frontend"))

    def test_roles_without_keywords_report_none(self):
        taxonomy = LocalTaxonomy()
        self.assertIsNone(taxonomy.ats_keywords("Cloud Engineer"))
        self.assertIn("restful", taxonomy.ats_keywords("backend developer"))

    def test_custom_catalog_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            skills_path = Path(tmp) / "skills.json"
            roles_path = Path(tmp) / "roles.json"
            skills_path.write_text(json.dumps(["Elixir", "Phoenix", ""]), encoding="utf-8")
            roles_path.write_text(json.dumps({"Elixir Developer": {"skills": ["Elixir"]}}), encoding="utf-8")

            taxonomy = LocalTaxonomy(skills_path=skills_path, roles_path=roles_path)
            self.assertEqual(taxonomy.known_skills(), ("elixir", "phoenix"))
            self.assertEqual(taxonomy.role_skills("elixir developer"), ("elixir",))
            self.assertEqual(match_skills("Built with Phoenix and Elixir", taxonomy), ["Elixir", "Phoenix"])

    def test_malformed_catalog_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            skills_path = Path(tmp) / "skills.json"
            skills_path.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
            with self.assertRaises(RuntimeError):
                LocalTaxonomy(skills_path=skills_path)


if __name__ == "__main__":
    unittest.main()
