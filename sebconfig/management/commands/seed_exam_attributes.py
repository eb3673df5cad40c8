from django.core.management.base import BaseCommand
from django.db import transaction

from sebconfig.models import AttributeType, ConfigurationAttribute, Orientation, TitleOrientation, View

# (name, type, parent, resources, validator, default)
ATTRIBUTES = [
    ("hashedAdminPassword", AttributeType.PASSWORD_FIELD, None, "", "", None),
    ("hashedQuitPassword", AttributeType.PASSWORD_FIELD, None, "", "", None),
    ("allowQuit", AttributeType.CHECKBOX, None, "", "", "true"),
    ("quitURL", AttributeType.TEXT_FIELD, None, "", "", ""),
    ("browserViewMode", AttributeType.RADIO_SELECTION, None, "0,1,2", "", "0"),
    ("mainBrowserWindowWidth", AttributeType.COMBO_SELECTION, None, "50%,100%", "", "100%"),
    ("taskBarHeight", AttributeType.INTEGER, None, "", r"\d+", "40"),
    ("defaultPageZoomLevel", AttributeType.DECIMAL, None, "", "", "1.0"),
    ("allowedDisplaysMaxNumber", AttributeType.SINGLE_SELECTION, None, "1,2,3", "", "1"),
    ("permittedProcesses", AttributeType.MULTI_CHECKBOX_SELECTION, None, "calculator,notes", "", ""),
    ("URLFilterEnable", AttributeType.CHECKBOX, None, "", "", "false"),
    ("URLFilterRules", AttributeType.TABLE, None, "", "", None),
    ("URLFilterRules.active", AttributeType.CHECKBOX, "URLFilterRules", "", "", "true"),
    ("URLFilterRules.regex", AttributeType.CHECKBOX, "URLFilterRules", "", "", "false"),
    ("URLFilterRules.expression", AttributeType.TEXT_FIELD, "URLFilterRules", "", "", ""),
    ("URLFilterRules.action", AttributeType.SINGLE_SELECTION, "URLFilterRules", "0,1", "", "0"),
]

# (name, x, y, width, height, title)
ORIENTATIONS = [
    ("hashedAdminPassword", 0, 0, 1, 1, TitleOrientation.LEFT),
    ("hashedQuitPassword", 1, 0, 1, 1, TitleOrientation.LEFT),
    ("allowQuit", 0, 1, 1, 1, TitleOrientation.NONE),
    ("quitURL", 1, 1, 1, 1, TitleOrientation.LEFT),
    ("browserViewMode", 0, 2, 1, 1, TitleOrientation.TOP),
    ("mainBrowserWindowWidth", 1, 2, 1, 1, TitleOrientation.LEFT),
    ("taskBarHeight", 0, 3, 1, 1, TitleOrientation.LEFT),
    ("defaultPageZoomLevel", 1, 3, 1, 1, TitleOrientation.LEFT),
    ("allowedDisplaysMaxNumber", 0, 4, 1, 1, TitleOrientation.LEFT),
    ("permittedProcesses", 1, 4, 1, 1, TitleOrientation.TOP),
    ("URLFilterEnable", 0, 5, 2, 1, TitleOrientation.NONE),
    ("URLFilterRules", 0, 6, 2, 2, TitleOrientation.TOP),
]


class Command(BaseCommand):
    help = "Creates the base set of exam configuration attributes with one editor view."

    def add_arguments(self, parser):
        parser.add_argument(
            "--template-id",
            type=int,
            default=0,
            help="Template the view and orientations are created for (default template: 0).",
        )
        parser.add_argument("--view-name", default="general", help="Name of the editor view.")

    @transaction.atomic
    def handle(self, *args, **options):
        attributes = {}
        created_count = 0
        for name, attribute_type, parent, resources, validator, default in ATTRIBUTES:
            attribute, created = ConfigurationAttribute.objects.update_or_create(
                name=name,
                defaults={
                    "type": attribute_type,
                    "parent": attributes.get(parent),
                    "resources": resources,
                    "validator": validator,
                    "default_value": default,
                },
            )
            attributes[name] = attribute
            created_count += int(created)
        self.stdout.write(
            self.style.SUCCESS(f"{len(attributes)} attributes seeded ({created_count} new).")
        )

        view, _ = View.objects.update_or_create(
            name=options["view_name"],
            template_id=options["template_id"],
            defaults={"columns": 2, "position": 0},
        )
        for name, x, y, width, height, title in ORIENTATIONS:
            Orientation.objects.update_or_create(
                attribute=attributes[name],
                template_id=options["template_id"],
                defaults={
                    "view": view,
                    "x_position": x,
                    "y_position": y,
                    "width": width,
                    "height": height,
                    "title": title,
                },
            )
        self.stdout.write(
            self.style.SUCCESS(f"View {view.name} with {len(ORIENTATIONS)} orientations seeded.")
        )
