"""
GraphQL documents sent to the upstream HRMS.

One document per REST operation. These are static strings; variables are
always passed separately, never interpolated into the text.
"""

# =============================================================================
# Jobs
# =============================================================================

GET_JOBS_QUERY = """
query GetJobs($filters: JobFilters, $limit: Int, $offset: Int) {
  jobs(filters: $filters, limit: $limit, offset: $offset) {
    id
    title
    department
    location
    employmentType
    experienceLevel
    salaryRange {
      min
      max
      currency
    }
    description
    requirements
    responsibilities
    benefits
    skills
    status
    postedDate
    closingDate
    applicationCount
    viewCount
    remoteWork
    urgentHiring
    createdBy {
      id
      name
    }
    createdAt
    updatedAt
  }
}
"""

GET_JOB_QUERY = """
query GetJob($id: ID!) {
  job(id: $id) {
    id
    title
    department
    location
    employmentType
    experienceLevel
    salaryRange {
      min
      max
      currency
    }
    description
    requirements
    responsibilities
    benefits
    skills
    status
    postedDate
    closingDate
    applicationCount
    viewCount
    remoteWork
    urgentHiring
    createdBy {
      id
      name
      email
    }
    createdAt
    updatedAt
  }
}
"""

CREATE_JOB_MUTATION = """
mutation CreateJob($input: JobInput!) {
  createJob(input: $input) {
    id
    title
    status
    postedDate
  }
}
"""

UPDATE_JOB_MUTATION = """
mutation UpdateJob($id: ID!, $input: JobInput!) {
  updateJob(id: $id, input: $input) {
    id
    title
    status
    updatedAt
  }
}
"""

PUBLISH_JOB_MUTATION = """
mutation PublishJob($id: ID!) {
  publishJob(id: $id) {
    id
    status
    postedDate
  }
}
"""

CLOSE_JOB_MUTATION = """
mutation CloseJob($id: ID!) {
  closeJob(id: $id) {
    id
    status
    closingDate
  }
}
"""

DELETE_JOB_MUTATION = """
mutation DeleteJob($id: ID!) {
  deleteJob(id: $id)
}
"""

INCREMENT_JOB_VIEW_MUTATION = """
mutation IncrementJobView($id: ID!) {
  incrementJobView(id: $id) {
    id
    viewCount
  }
}
"""

GENERATE_JOB_DESCRIPTION_MUTATION = """
mutation GenerateJobDescription($input: JobDescriptionInput!) {
  generateJobDescription(input: $input) {
    description
    requirements
    responsibilities
    suggestedSkills
  }
}
"""

# =============================================================================
# Applications
# =============================================================================

SUBMIT_APPLICATION_MUTATION = """
mutation SubmitApplication($input: ApplicationInput!) {
  submitApplication(input: $input) {
    id
    status
    appliedDate
    aiScore {
      overall
      insights
      strengths
      concerns
      recommendation
      generatedAt
    }
  }
}
"""

GET_APPLICATIONS_QUERY = """
query GetApplications($filters: ApplicationFilters, $limit: Int, $offset: Int) {
  applications(filters: $filters, limit: $limit, offset: $offset) {
    id
    job {
      id
      title
      department
    }
    candidate {
      id
      firstName
      lastName
      email
      phone
      location
    }
    status
    appliedDate
    lastUpdated
    resumeUrl
    coverLetter
    aiScore {
      overall
      recommendation
    }
  }
}
"""

GET_APPLICATION_QUERY = """
query GetApplication($id: ID!) {
  application(id: $id) {
    id
    job {
      id
      title
      department
      location
      description
      requirements
    }
    candidate {
      id
      firstName
      lastName
      email
      phone
      location
      resumeUrl
      linkedinUrl
      portfolioUrl
    }
    status
    appliedDate
    lastUpdated
    resumeUrl
    coverLetter
    linkedinUrl
    portfolioUrl
    yearsOfExperience
    currentLocation
    willingToRelocate
    expectedSalary
    availability
    aiScore {
      overall
      insights
      strengths
      concerns
      recommendation
      generatedAt
    }
    notes {
      id
      author {
        id
        name
      }
      content
      createdAt
      isInternal
    }
    timeline {
      id
      type
      description
      performedBy {
        id
        name
      }
      timestamp
    }
  }
}
"""

UPDATE_APPLICATION_STATUS_MUTATION = """
mutation UpdateApplicationStatus($id: ID!, $status: ApplicationStatus!, $note: String) {
  updateApplicationStatus(id: $id, status: $status, note: $note) {
    id
    status
    lastUpdated
  }
}
"""

BULK_UPDATE_APPLICATION_STATUS_MUTATION = """
mutation BulkUpdateApplicationStatus($ids: [ID!]!, $status: ApplicationStatus!) {
  bulkUpdateApplicationStatus(ids: $ids, status: $status) {
    id
    status
  }
}
"""

ADD_APPLICATION_NOTE_MUTATION = """
mutation AddApplicationNote($applicationId: ID!, $content: String!, $isInternal: Boolean) {
  addApplicationNote(applicationId: $applicationId, content: $content, isInternal: $isInternal) {
    id
    content
    author {
      id
      name
    }
    createdAt
  }
}
"""

SCORE_APPLICATION_MUTATION = """
mutation ScoreApplication($applicationId: ID!) {
  scoreApplication(applicationId: $applicationId) {
    overall
    insights
    strengths
    concerns
    recommendation
    generatedAt
  }
}
"""

# =============================================================================
# Analytics
# =============================================================================

GET_RECRUITMENT_METRICS_QUERY = """
query GetRecruitmentMetrics($dateRange: DateRangeInput!) {
  recruitmentMetrics(dateRange: $dateRange) {
    totalJobs
    activeJobs
    totalApplications
    avgApplicationsPerJob
    avgTimeToHire
    conversionRates {
      viewToApply
      applyToScreen
      screenToInterview
      interviewToOffer
      offerToAccept
    }
    topPerformingJobs {
      job {
        id
        title
      }
      views
      applications
      conversionRate
      avgTimeToFill
    }
    applicationsByStatus {
      status
      count
      percentage
    }
    applicationTrend {
      date
      value
    }
    sourceBreakdown {
      source
      count
      percentage
    }
  }
}
"""

GET_JOB_PERFORMANCE_QUERY = """
query GetJobPerformance($jobId: ID!) {
  jobPerformance(jobId: $jobId) {
    job {
      id
      title
    }
    views
    applications
    conversionRate
    avgTimeToFill
  }
}
"""

GET_APPLICATION_PIPELINE_QUERY = """
query GetApplicationPipeline($jobId: ID) {
  applicationPipeline(jobId: $jobId) {
    status
    count
    applications {
      id
      candidate {
        firstName
        lastName
      }
      appliedDate
      aiScore {
        overall
      }
    }
  }
}
"""

# =============================================================================
# Candidates
# =============================================================================

GET_CANDIDATE_QUERY = """
query GetCandidate($id: ID!) {
  candidate(id: $id) {
    id
    firstName
    lastName
    email
    phone
    location
    headline
    summary
    resumeUrl
    linkedinUrl
    portfolioUrl
    githubUrl
    skills
    experience {
      company
      title
      startDate
      endDate
      current
      description
      achievements
    }
    education {
      institution
      degree
      field
      startDate
      endDate
      gpa
    }
    certifications {
      name
      issuer
      issueDate
      expiryDate
      credentialId
    }
    languages {
      language
      proficiency
    }
    applications {
      id
      job {
        id
        title
      }
      status
      appliedDate
    }
    availability
    expectedSalary
    preferredLocations
    remotePreference
    createdAt
    updatedAt
  }
}
"""

UPDATE_CANDIDATE_PROFILE_MUTATION = """
mutation UpdateCandidateProfile($id: ID!, $input: CandidateProfileInput!) {
  updateCandidateProfile(id: $id, input: $input) {
    id
    firstName
    lastName
    updatedAt
  }
}
"""

# =============================================================================
# Health
# =============================================================================

HEALTH_QUERY = "query { __typename }"


# Operation name -> document, for lookups and snapshot tests
CATALOG = {
    "GetJobs": GET_JOBS_QUERY,
    "GetJob": GET_JOB_QUERY,
    "CreateJob": CREATE_JOB_MUTATION,
    "UpdateJob": UPDATE_JOB_MUTATION,
    "PublishJob": PUBLISH_JOB_MUTATION,
    "CloseJob": CLOSE_JOB_MUTATION,
    "DeleteJob": DELETE_JOB_MUTATION,
    "IncrementJobView": INCREMENT_JOB_VIEW_MUTATION,
    "GenerateJobDescription": GENERATE_JOB_DESCRIPTION_MUTATION,
    "SubmitApplication": SUBMIT_APPLICATION_MUTATION,
    "GetApplications": GET_APPLICATIONS_QUERY,
    "GetApplication": GET_APPLICATION_QUERY,
    "UpdateApplicationStatus": UPDATE_APPLICATION_STATUS_MUTATION,
    "BulkUpdateApplicationStatus": BULK_UPDATE_APPLICATION_STATUS_MUTATION,
    "AddApplicationNote": ADD_APPLICATION_NOTE_MUTATION,
    "ScoreApplication": SCORE_APPLICATION_MUTATION,
    "GetRecruitmentMetrics": GET_RECRUITMENT_METRICS_QUERY,
    "GetJobPerformance": GET_JOB_PERFORMANCE_QUERY,
    "GetApplicationPipeline": GET_APPLICATION_PIPELINE_QUERY,
    "GetCandidate": GET_CANDIDATE_QUERY,
    "UpdateCandidateProfile": UPDATE_CANDIDATE_PROFILE_MUTATION,
}
