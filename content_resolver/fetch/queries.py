"""GraphQL documents sent to the content API."""

from __future__ import annotations


LICENSE_FRAGMENT = """
fragment license on License {
  id
  url
  title
  shortTitle
  default
}
"""

PATH_FRAGMENT = """
fragment path on Navigation {
  path {
    nodes {
      label
      url
      id
    }
  }
}
"""

TAXONOMY_TERMS_FRAGMENT = """
fragment taxonomyTerms on AbstractTaxonomyTermChild {
  taxonomyTerms {
    nodes {
      navigation {
        ...path
      }
    }
  }
}
"""

EXERCISE_FRAGMENT = """
fragment exercise on AbstractExercise {
  id
  alias
  trashed
  currentRevision {
    id
    content
  }
  license {
    ...license
  }
  revisions(unrevised: true) {
    totalCount
  }
  solution {
    id
    trashed
    currentRevision {
      content
    }
    license {
      ...license
    }
  }
}
"""

PAGE_QUERY = (
    """
query page($alias: AliasInput) {
  uuid(alias: $alias) {
    __typename
    id
    alias
    trashed

    ... on Page {
      currentRevision { id title content }
      navigation { data ...path }
    }

    ... on Article {
      currentRevision { id title content metaTitle metaDescription }
      license { ...license }
      revisions(unrevised: true) { totalCount }
      ...taxonomyTerms
    }

    ... on Video {
      currentRevision { id title url content }
      license { ...license }
      revisions(unrevised: true) { totalCount }
      ...taxonomyTerms
    }

    ... on Applet {
      currentRevision { id title content url metaTitle metaDescription }
      license { ...license }
      revisions(unrevised: true) { totalCount }
      ...taxonomyTerms
    }

    ... on Event {
      currentRevision { id title content metaTitle metaDescription }
      ...taxonomyTerms
    }

    ... on CoursePage {
      currentRevision { id title content }
      license { ...license }
      revisions(unrevised: true) { totalCount }
      course {
        id
        currentRevision { title }
        pages {
          id
          alias
          trashed
          currentRevision { title trashed }
        }
        ...taxonomyTerms
      }
    }

    ... on Course {
      currentRevision { title metaDescription }
      pages {
        id
        alias
        trashed
        currentRevision { title trashed }
      }
    }

    ... on Exercise {
      ...exercise
      ...taxonomyTerms
    }

    ... on GroupedExercise {
      ...exercise
      exerciseGroup { id }
    }

    ... on ExerciseGroup {
      currentRevision { id content }
      license { ...license }
      revisions(unrevised: true) { totalCount }
      exercises { ...exercise }
      ...taxonomyTerms
    }

    ... on Solution {
      exercise { id }
    }

    ... on TaxonomyTerm {
      type
      name
      description
      navigation { data ...path }
      children {
        nodes {
          __typename
          ... on AbstractEntity { id alias trashed }
          ... on Article { currentRevision { title } }
          ... on Video { currentRevision { title } }
          ... on Applet { currentRevision { title } }
          ... on Course { currentRevision { title } }
          ... on Event { currentRevision { title } }
          ... on Exercise { ...exercise }
          ... on ExerciseGroup {
            currentRevision { id content }
            license { ...license }
            exercises { ...exercise }
          }
          ... on TaxonomyTerm {
            id
            alias
            type
            name
            trashed
            children {
              nodes {
                __typename
                ... on AbstractEntity { id alias trashed }
                ... on Article { currentRevision { title } }
                ... on Video { currentRevision { title } }
                ... on Applet { currentRevision { title } }
                ... on Course { currentRevision { title } }
                ... on Event { currentRevision { title } }
                ... on TaxonomyTerm { id alias type name trashed }
              }
            }
          }
        }
      }
    }

    ... on User {
      username
    }
  }
}
"""
    + LICENSE_FRAGMENT
    + PATH_FRAGMENT
    + TAXONOMY_TERMS_FRAGMENT
    + EXERCISE_FRAGMENT
)

REVISION_QUERY = (
    """
query revision($id: Int) {
  uuid(id: $id) {
    __typename
    id
    trashed
    ... on AbstractRevision {
      date
      content
      author { id username activeAuthor activeDonor activeReviewer }
    }
    ... on ArticleRevision {
      title metaTitle metaDescription changes
      repository {
        __typename id alias
        currentRevision { id title content metaTitle metaDescription }
        ...taxonomyTerms
      }
    }
    ... on PageRevision {
      title
      repository { __typename id alias currentRevision { id title content } }
    }
    ... on CoursePageRevision {
      title changes
      repository { __typename id alias currentRevision { id title content } }
    }
    ... on VideoRevision {
      title url changes
      repository {
        __typename id alias
        currentRevision { id title url content }
        ...taxonomyTerms
      }
    }
    ... on EventRevision {
      title metaTitle metaDescription changes
      repository {
        __typename id alias
        currentRevision { id title content metaTitle metaDescription }
      }
    }
    ... on AppletRevision {
      title url metaTitle metaDescription changes
      repository {
        __typename id alias
        currentRevision { id title content url metaTitle metaDescription }
        ...taxonomyTerms
      }
    }
    ... on CourseRevision {
      title metaDescription changes
      repository {
        __typename id alias
        currentRevision { id title metaDescription }
      }
    }
    ... on ExerciseRevision {
      changes
      repository {
        ...exercise
        ...taxonomyTerms
      }
    }
    ... on GroupedExerciseRevision {
      changes
      repository { ...exercise }
    }
    ... on ExerciseGroupRevision {
      changes
      repository {
        __typename id alias
        currentRevision { id content }
        license { ...license }
      }
    }
    ... on SolutionRevision {
      changes
      repository { __typename id alias currentRevision { id content } }
    }
  }
}
"""
    + LICENSE_FRAGMENT
    + PATH_FRAGMENT
    + TAXONOMY_TERMS_FRAGMENT
    + EXERCISE_FRAGMENT
)

USER_QUERY = """
query user($path: String!, $instance: Instance) {
  uuid(alias: { path: $path, instance: $instance }) {
    __typename
    id
    alias
    ... on User {
      username
      description
      lastLogin
      date
      activeAuthor
      activeDonor
      activeReviewer
    }
  }
}
"""


def aliases_query(ids: list[int]) -> str:
    """Build one batched query that resolves each id to its alias."""
    lines = [f"  uuid{i}: uuid(id: {int(i)}) {{ id alias }}" for i in ids]
    return "query aliases {\n" + "\n".join(lines) + "\n}\n"
