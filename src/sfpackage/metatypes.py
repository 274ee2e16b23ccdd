"""Source folder to Salesforce metadata type names."""

from typing import Dict

METADATA_TYPES: Dict[str, str] = {
    "applications": "CustomApplication",
    "approvalProcesses": "ApprovalProcess",
    "assignmentRules": "AssignmentRules",
    "aura": "AuraDefinitionBundle",
    "autoResponseRules": "AutoResponseRules",
    "businessProcesses": "BusinessProcess",
    "classes": "ApexClass",
    "compactLayouts": "CompactLayout",
    "components": "ApexComponent",
    "contentassets": "ContentAsset",
    "customMetadata": "CustomMetadata",
    "customPermissions": "CustomPermission",
    "dashboards": "Dashboard",
    "documents": "Document",
    "email": "EmailTemplate",
    "escalationRules": "EscalationRules",
    "fieldSets": "FieldSet",
    "fields": "CustomField",
    "flexipages": "FlexiPage",
    "flows": "Flow",
    "globalValueSets": "GlobalValueSet",
    "groups": "Group",
    "labels": "CustomLabels",
    "layouts": "Layout",
    "letterhead": "Letterhead",
    "listViews": "ListView",
    "lwc": "LightningComponentBundle",
    "namedCredentials": "NamedCredential",
    "objectTranslations": "CustomObjectTranslation",
    "objects": "CustomObject",
    "pages": "ApexPage",
    "permissionsets": "PermissionSet",
    "profiles": "Profile",
    "queues": "Queue",
    "quickActions": "QuickAction",
    "recordTypes": "RecordType",
    "remoteSiteSettings": "RemoteSiteSetting",
    "reportTypes": "ReportType",
    "reports": "Report",
    "roles": "Role",
    "settings": "Settings",
    "sharingRules": "SharingRules",
    "staticresources": "StaticResource",
    "tabs": "CustomTab",
    "translations": "Translations",
    "triggers": "ApexTrigger",
    "validationRules": "ValidationRule",
    "webLinks": "WebLink",
    "workflows": "Workflow",
}


def metadata_type_for(folder: str) -> str:
    """Metadata type for a source folder, or the folder name when unknown."""
    return METADATA_TYPES.get(folder, folder)
