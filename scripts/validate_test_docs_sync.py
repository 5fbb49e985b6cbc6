#!/usr/bin/env python3
"""
Check that docs/test_scenarios_business_summary.md documents every
scenario in tests/test_integration_scenarios.py, and nothing else.

Missing documentation is an error. Documentation for a scenario that no
longer exists is a warning, or an error with --strict.

Run: python scripts/validate_test_docs_sync.py [--strict]
"""

import argparse
import ast
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_TEST_FILE = PROJECT_ROOT / 'tests' / 'test_integration_scenarios.py'
DEFAULT_DOC_FILE = PROJECT_ROOT / 'docs' / 'test_scenarios_business_summary.md'

CLASS_PATTERN = re.compile(r'\*\*Test Class\*\*:\s*`(Test\w+)`')
METHOD_PATTERN = re.compile(r'\*\*Test Method\*\*:\s*`(test_\w+)`')


@dataclass
class SyncReport:
    scenarios: dict[str, list[str]]
    documented_classes: set[str]
    documented_methods: set[str]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def methods(self) -> set[str]:
        return {m for methods in self.scenarios.values() for m in methods}


def collect_scenarios(test_file: Path) -> dict[str, list[str]]:
    """Map each top-level Test* class to its test_* methods, in file order."""
    tree = ast.parse(test_file.read_text())
    scenarios = {}
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name.startswith('Test'):
            scenarios[node.name] = [
                item.name for item in node.body
                if isinstance(item, ast.FunctionDef) and item.name.startswith('test_')
            ]
    return scenarios


def compare(test_file: Path, doc_file: Path) -> SyncReport:
    content = doc_file.read_text()
    report = SyncReport(
        scenarios=collect_scenarios(test_file),
        documented_classes=set(CLASS_PATTERN.findall(content)),
        documented_methods=set(METHOD_PATTERN.findall(content)),
    )

    classes = set(report.scenarios)
    report.errors.extend(f"Missing class documentation: {c}" for c in sorted(classes - report.documented_classes))
    report.errors.extend(f"Missing method documentation: {m}" for m in sorted(report.methods - report.documented_methods))
    report.warnings.extend(f"Documented class no longer exists: {c}" for c in sorted(report.documented_classes - classes))
    report.warnings.extend(f"Documented method no longer exists: {m}" for m in sorted(report.documented_methods - report.methods))
    return report


def print_report(report: SyncReport, test_file: Path, doc_file: Path) -> None:
    print("=" * 60)
    print("Test Documentation Sync Validation")
    print("=" * 60)
    print(f"\nTest file: {test_file.name}")
    print(f"Doc file:  {doc_file.name}")
    print(f"\nScenario classes: {len(report.scenarios)} ({len(report.documented_classes)} documented)")
    print(f"Scenario methods: {len(report.methods)} ({len(report.documented_methods)} documented)")

    if report.errors:
        print(f"\n❌ ERRORS ({len(report.errors)}):")
        for error in report.errors:
            print(f"   - {error}")

    if report.warnings:
        print(f"\n⚠️  WARNINGS ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"   - {warning}")

    if not report.errors and not report.warnings:
        print("\n✅ All scenarios are documented and in sync!")

    print("\nCoverage by Class:")
    for cls, methods in report.scenarios.items():
        print(f"\n  {'✅' if cls in report.documented_classes else '❌'} {cls}")
        for method in methods:
            print(f"      {'✅' if method in report.documented_methods else '❌'} {method}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--test-file', type=Path, default=DEFAULT_TEST_FILE)
    parser.add_argument('--doc-file', type=Path, default=DEFAULT_DOC_FILE)
    parser.add_argument('--strict', action='store_true', help="treat stale documentation as an error")
    args = parser.parse_args(argv)

    for path in (args.test_file, args.doc_file):
        if not path.exists():
            print(f"❌ File not found: {path}")
            return 1

    report = compare(args.test_file, args.doc_file)
    print_report(report, args.test_file, args.doc_file)

    if report.errors or (args.strict and report.warnings):
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
