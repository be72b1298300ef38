"""
Template loading and Java text helpers for the WebDriver generator.
Fixed files (BasePage, CustomException, the test harness shell) live as
templates next to the package; everything else is assembled line by line.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import unquote

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

INDENT = "  "

JAVA_IMPORTS = [
    "import java.time.Duration;",
    "import java.util.HashMap;",
    "import java.util.List;",
    "import java.util.function.Function;",
    "import java.util.logging.Level;",
    "import java.util.logging.Logger;",
    "import org.openqa.selenium.By;",
    "import org.openqa.selenium.WebDriver;",
    "import org.openqa.selenium.WebElement;",
    "import org.openqa.selenium.support.ui.Sleeper;",
    "import org.openqa.selenium.support.ui.WebDriverWait;",
]

HARNESS_IMPORTS = [
    "import java.net.URL;",
    "import java.util.HashMap;",
    "import java.util.logging.Level;",
    "import java.util.logging.Logger;",
    "import org.junit.After;",
    "import org.junit.Before;",
    "import org.junit.Test;",
    "import org.openqa.selenium.WebDriver;",
    "import org.openqa.selenium.chrome.ChromeOptions;",
    "import org.openqa.selenium.remote.RemoteWebDriver;",
]


class JavaTemplate:
    """Loads Java templates and renders the small pieces of Java syntax."""

    @staticmethod
    def load_template(template_name: str) -> str:
        """Load a template file"""
        template_path = TEMPLATE_DIR / template_name
        if not template_path.exists():
            raise FileNotFoundError(f"Template not found: {template_name}")
        return template_path.read_text(encoding="utf-8")

    @classmethod
    def render(cls, template_name: str, values: Dict[str, str]) -> str:
        text = cls.load_template(template_name)
        for key, value in values.items():
            text = text.replace("{{" + key + "}}", value)
        return text

    @staticmethod
    def escape_double_quotes(text: str) -> str:
        return text.replace("\\", "\\\\").replace('"', '\\"')

    @classmethod
    def quote(cls, value: Optional[Any]) -> str:
        """Quote a recorded data value as a Java string literal.

        ``None`` means the step has no data, which renders as no argument.
        Recorded values are percent-escaped.
        """
        if value is None:
            return ""
        if isinstance(value, bool):
            value = "true" if value else "false"
        return '"' + cls.escape_double_quotes(unquote(str(value))) + '"'

    @staticmethod
    def to_method_name(step_name: str) -> str:
        """'Click-Sign-in-1' -> 'clickSignIn1'"""
        temp = step_name.lower()
        temp = re.sub(r"-([a-z])", lambda m: m.group(1).upper(), temp)
        return re.sub(r"\W+", "", temp.replace("-", ""), flags=re.ASCII)

    @staticmethod
    def to_test_method_name(test_name: str) -> str:
        """Turn a free-form test name into a Java identifier, keeping its casing."""
        words = [w for w in re.split(r"[^0-9A-Za-z_]+", test_name) if w]
        if not words:
            return "recordedTest"
        name = words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])
        if name[0].isdigit():
            name = "test" + name
        return name

    @staticmethod
    def add_indentations(num: int, lines: Iterable[str]) -> List[str]:
        pad = " " * num
        return [pad + line if line else "" for line in lines]

    @staticmethod
    def java_doc(lines: Iterable[str]) -> List[str]:
        doc = ["/**"]
        for line in lines:
            doc.append(f" * {line}" if line else " *")
        doc.append(" */")
        return doc

    @classmethod
    def class_doc(cls, description: str, author: str) -> List[str]:
        lines = [description]
        if author:
            lines += ["", f"@author {author}"]
        return cls.java_doc(lines)

    @staticmethod
    def header(copyright_line: str, package: str) -> List[str]:
        lines = [f"// {copyright_line}", ""]
        if package:
            lines += [f"package {package};", ""]
        return lines

    @staticmethod
    def logger_field(class_name: str) -> List[str]:
        return [
            "private static final Logger logger =",
            f"    Logger.getLogger({class_name}.class.getName());",
        ]
