from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(CamelModel):
    # Missing fields default to "" so the service reports them as a 400
    resume_text: str = Field("", description="Plain text resume content")
    job_description: str = Field("", description="Job description text")


class RewriteSectionRequest(CamelModel):
    section_text: str = Field("", description="Resume section to rewrite")
    job_description: str = Field("", description="Job description text")
    section_type: str | None = Field(None, description="e.g. 'summary', 'experience'")
