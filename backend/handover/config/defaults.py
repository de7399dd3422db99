"""Built-in checklist configuration used until an admin saves one"""
from typing import Any, Dict


DEFAULT_CHECKLIST_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "sales": [
        {"id": "brandName", "label": "Brand name", "type": "text"},
        {"id": "storeUrlMyShopify", "label": "Shopify store URL (myshopify)", "type": "text"},
        {"id": "storePublicUrl", "label": "Shopify store URL (public)", "type": "text"},
        {"id": "collabCode", "label": "Collab request code", "type": "text"},
        {"id": "scopeOfWork", "label": "Scope of work", "type": "textarea"},
        {"id": "designRefs", "label": "Design references", "type": "multi_input"},
        {"id": "additionalDocs", "label": "Additional PRD/References", "type": "multi_input"},
        {"id": "paymentConfirmation", "label": "One-time payment confirmation", "type": "checkbox"},
        {"id": "planDetails", "label": "Plan + Revenue Share %", "type": "text"},
        {"id": "revenueShare", "label": "Revenue Share", "type": "text"},
        {"id": "gmvInfo", "label": "GMV details", "type": "textarea"},
        {"id": "releaseType", "label": "Fresh release or migration", "type": "select",
         "options": ["Fresh", "Migration"]},
        {"id": "dunsStatus", "label": "DUNS / Developer Account Status", "type": "select",
         "options": ["Pending", "In Progress", "Completed", "Not Required"]},
        {"id": "themeType", "label": "Theme Type", "type": "select",
         "options": ["P1", "mWeb Parity", "Custom"]},
        {
            "id": "integrations",
            "label": "Integrations",
            "type": "group",
            "fields": [
                {"id": "integrations", "label": "Integrations in scope", "type": "multi_select",
                 "optionsSource": "integrations", "optional": True},
            ],
        },
        {
            "id": "poc",
            "label": "POC Details",
            "type": "group",
            "fields": [
                {"id": "name", "label": "Name", "type": "text"},
                {"id": "email", "label": "Email", "type": "text"},
                {"id": "phone", "label": "Phone", "type": "text"},
            ],
        },
    ],
    "launch": [
        {"id": "androidDeveloperAccount", "label": "Android Developer Account", "type": "checkbox"},
        {"id": "iosDeveloperAccount", "label": "iOS Developer Account", "type": "checkbox"},
        {"id": "firebaseAccess", "label": "Firebase Access (Admin)", "type": "checkbox"},
        {"id": "metaDeveloperAccess", "label": "Meta Developer Access", "type": "checkbox"},
        {"id": "dataClarityProvided", "label": "Data Clarity Provided", "type": "checkbox"},
        {
            "id": "integrations",
            "label": "Integrations",
            "type": "group",
            "fields": [
                {"id": "integrations", "label": "Integrations", "type": "multi_select",
                 "optionsSource": "integrations", "hasStatus": True, "hasVersion": True},
            ],
        },
        {"id": "integrationsCredentials", "label": "Integrations - Credentials & Keys",
         "type": "multi_input", "hasVersion": True},
        {"id": "storeListingDetails", "label": "Store Listing Details", "type": "textarea"},
        {"id": "keystoreFiles", "label": "Keystore Files", "type": "url"},
        {"id": "otpTestCredentials", "label": "OTP Test Credentials", "type": "text", "optional": True},
        {
            "id": "developmentItems",
            "label": "Development Items",
            "type": "group",
            "fields": [
                {"id": "customFeatures", "label": "Custom Features", "type": "multi_input",
                 "hasStatus": True, "hasVersion": True},
                {"id": "changeRequests", "label": "Change Requests", "type": "multi_input",
                 "hasStatus": True, "hasVersion": True, "optional": True},
            ],
        },
        {"id": "bugReports", "label": "Bug Reports (link / notes)", "type": "textarea"},
        {"id": "testCases", "label": "Test Cases (Google Sheet link)", "type": "url"},
        {
            "id": "additionalInformation",
            "label": "Additional Information",
            "type": "group",
            "fields": [
                {"id": "devComments", "label": "Dev Comments", "type": "textarea",
                 "hasVersion": True, "optional": True},
                {"id": "externalCommunications", "label": "External Communications", "type": "textarea",
                 "hasVersion": True, "optional": True},
                {"id": "remarks", "label": "Remarks", "type": "textarea",
                 "hasVersion": True, "optional": True},
            ],
        },
    ],
}
