# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GraphQL documents sent to the console API."""

GET_SCAN = """
query GetScans($teamSlug: String!, $projectSlug: String!, $scanId: String!) {
  teams(teamSlug: $teamSlug) {
    projects(projectSlug: $projectSlug) {
      scans(scanId: $scanId) {
        scanId
        scanCompleted
        serviceCount
        regionCount
        resourceCost
        scanItems {
          service
          region
          findings
          summary
          remedy
          resourceCost
          scanItemEntries {
            findings
            title
            summary
            remedy
            commands
            resourceCost
          }
        }
      }
    }
  }
}
"""

GET_PROJECT = """
query GetProjectInfo($teamSlug: String!, $projectSlug: String!) {
  teams(teamSlug: $teamSlug) {
    projects(projectSlug: $projectSlug) {
      projectSlug
      projectName
      accountConnections {
        accountId
      }
      scans {
        scanId
        scanCompleted
        created
        serviceCount
        regionCount
        resourceCost
      }
    }
  }
}
"""

START_SCAN = """
mutation StartScan($teamSlug: String!, $projectSlug: String!, $regions: [String!]!, $services: [String!]!) {
  startScan(teamSlug: $teamSlug, projectSlug: $projectSlug, services: $services, regions: $regions)
}
"""
