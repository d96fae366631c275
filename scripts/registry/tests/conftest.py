"""Shared fixtures for registry tests."""

import logging

import pytest

from scripts.registry.config import get_default_config

ALERT_SOURCE = (
    "/** Displays a dismissible message. */\n"
    'import * as React from "react";\n'
    'import { cn } from "@/lib/utils";\n'
    "\n"
    "export const Alert = React.forwardRef<HTMLDivElement, AlertProps>((props, ref) => (\n"
    '  <div ref={ref} className={cn("rounded-md p-4")} {...props} />\n'
    "));\n"
    'Alert.displayName = "Alert";\n'
)

BUTTON_SOURCE = (
    'import * as React from "react"\n'
    'import { Slot } from "@radix-ui/react-slot"\n'
    'import { cva, type VariantProps } from "class-variance-authority"\n'
    "\n"
    'import { cn } from "@/lib/utils"\n'
    "\n"
    "const buttonVariants = cva(\n"
    '  "inline-flex items-center bg-[hsl(var(--primary))] text-[hsl(var(--primary-foreground))]",\n'
    "  {\n"
    "    variants: {\n"
    "      variant: {\n"
    '        default: "bg-primary",\n'
    '        outline: "border border-input",\n'
    "      },\n"
    "      size: {\n"
    '        default: "h-10 px-4",\n'
    '        sm: "h-9 px-3",\n'
    "      },\n"
    "    },\n"
    "  }\n"
    ")\n"
    "\n"
    "export interface ButtonProps\n"
    "  extends React.ButtonHTMLAttributes<HTMLButtonElement>,\n"
    "    VariantProps<typeof buttonVariants> {\n"
    "  asChild?: boolean\n"
    "}\n"
    "\n"
    "export const Button = React.forwardRef<HTMLButtonElement, ButtonProps>(\n"
    "  ({ className, variant, size, asChild = false, ...props }, ref) => {\n"
    '    const Comp = asChild ? Slot : "button"\n'
    "    return <Comp className={cn(buttonVariants({ variant, size, className }))} ref={ref} {...props} />\n"
    "  }\n"
    ")\n"
)

DIALOG_SOURCE = (
    'import * as React from "react"\n'
    "import {\n"
    "  Root,\n"
    "  Trigger,\n"
    "  Content,\n"
    '} from "@radix-ui/react-dialog"\n'
    'import { X } from "lucide-react"\n'
    'import { Button } from "@/components/ui/button"\n'
    'import { cn } from "@/lib/utils"\n'
    "\n"
    "export const Dialog = Root\n"
    "export const DialogTrigger = Trigger\n"
    "export function DialogContent() {\n"
    "  return <Content><Button /><X /></Content>\n"
    "}\n"
)

STAT_CARD_SOURCE = (
    'import * as React from "react"\n'
    'import { Card } from "@/components/ui/card"\n'
    "\n"
    "export function StatCard({ label, value }: { label: string; value: number }) {\n"
    "  return <Card>{label}: {value}</Card>\n"
    "}\n"
)


def _write_component(project, category, filename, content):
    """Write a component source under src/components/<category>/."""
    path = project / "src" / "components" / category / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def config():
    """Default registry configuration."""
    return get_default_config()


@pytest.fixture
def alert_source():
    """Documented ui component with a forwarded ref."""
    return ALERT_SOURCE


@pytest.fixture
def button_source():
    """Radix-based ui component with variants and sizes."""
    return BUTTON_SOURCE


@pytest.fixture
def dialog_source():
    """Component with a multi-line import and an internal dependency."""
    return DIALOG_SOURCE


@pytest.fixture
def stat_card_source():
    return STAT_CARD_SOURCE


@pytest.fixture
def make_component(tmp_path):
    """Return a writer for component sources under tmp_path."""

    def _make(category, filename, content):
        return _write_component(tmp_path, category, filename, content)

    return _make


@pytest.fixture
def component_project(tmp_path):
    """Create a project with ui and custom components plus non-component files."""
    _write_component(tmp_path, "ui", "alert.tsx", ALERT_SOURCE)
    _write_component(tmp_path, "ui", "button.tsx", BUTTON_SOURCE)
    _write_component(tmp_path, "ui", "dialog.tsx", DIALOG_SOURCE)
    _write_component(tmp_path, "ui", "button.test.tsx", "test('renders', () => {})\n")
    _write_component(tmp_path, "ui", "button.stories.tsx", "export default {}\n")
    _write_component(tmp_path, "ui", "index.ts", 'export * from "./button"\n')
    _write_component(tmp_path, "ui", "README.md", "# UI\n")
    _write_component(tmp_path, "custom", "stat-card.tsx", STAT_CARD_SOURCE)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_registry_logger():
    """Drop handlers the CLI attached so they do not outlive captured streams."""
    yield
    logger = logging.getLogger("scripts.registry")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
