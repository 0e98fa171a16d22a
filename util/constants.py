class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    ASK = V1 + "/ask"
    COURSE_INFO = V1 + "/course-info"
    ANALYTICS = V1 + "/analytics"
    HEALTHZ = "/healthz"


class ExternalURIs:
    ANTHROPIC_MESSAGES = "https://api.anthropic.com/v1/messages"
    GEMINI_GENERATE = (
        "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    )
    GOOGLE_DOC_EXPORT = "https://docs.google.com/document/d/{doc_id}/export?format=txt"
    GOOGLE_DOCS_API = "https://docs.googleapis.com/v1/documents/{doc_id}"
